from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from repairdesk.repair.cost import QuoteLine


@dataclass(frozen=True)
class QuotePayload:
    customer_name: str
    product: str
    rma_number: str
    lines: tuple[QuoteLine, ...]
    labor_cost: float
    total: float
    technician_notes: str


@dataclass(frozen=True)
class ReportPayload:
    customer_name: str
    product: str
    product_name: str
    rma_number: str
    action_summary: str
    technician_notes: str


@dataclass(frozen=True)
class ReportText:
    email: str
    sms: str


class TextGenerator(ABC):
    """Turns assembled payloads into customer-facing text."""

    @abstractmethod
    async def generate_quote(self, payload: QuotePayload) -> str: ...

    @abstractmethod
    async def generate_report(self, payload: ReportPayload) -> ReportText: ...
