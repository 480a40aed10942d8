from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from repairdesk.catalog.models import Part
from repairdesk.repair.models import RepairAction, RepairRecord


class PartLookup(Protocol):
    def lookup(self, part_id: str) -> Part | None: ...


@dataclass(frozen=True)
class QuoteLine:
    part_id: str
    name: str
    action: RepairAction
    price: float


def total(record: RepairRecord, catalog: PartLookup) -> float:
    """
    Labor cost plus the catalog price of every replaced part.

    Repaired parts are free, and parts no longer in the catalog count as 0.
    Always computed from the current catalog, never stored on the record.
    """
    return record.labor_cost + parts_total(record, catalog)


def parts_total(record: RepairRecord, catalog: PartLookup) -> float:
    return sum(line.price for line in itemize(record, catalog))


def itemize(record: RepairRecord, catalog: PartLookup) -> list[QuoteLine]:
    """One priced line per part action, in the order they were selected."""
    lines: list[QuoteLine] = []
    for action in record.parts_actions:
        part = catalog.lookup(action.part_id)
        name = part.name if part is not None else action.part_id
        if action.action is RepairAction.REPAIRED:
            lines.append(
                QuoteLine(action.part_id, f"{name} (Repair)", action.action, 0.0)
            )
        else:
            price = part.price if part is not None else 0.0
            lines.append(QuoteLine(action.part_id, name, action.action, price))
    return lines
