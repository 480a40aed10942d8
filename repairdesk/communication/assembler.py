from __future__ import annotations

import logging

from repairdesk.communication.interface import (
    QuotePayload,
    ReportPayload,
    ReportText,
    TextGenerator,
)
from repairdesk.repair.cost import PartLookup, itemize, total
from repairdesk.repair.models import RepairAction, RepairRecord

logger = logging.getLogger(__name__)

QUOTE_ERROR = "Error generating quote. Please try again."
REPORT_ERROR = "Error generating AI report. Please check your connection and try again."
SMS_ERROR = "Error generating SMS."

EMPTY_QUOTE = "Error generating quote."
EMPTY_EMAIL = "Error generating email."

MAINTENANCE_SUMMARY = (
    "General maintenance, diagnostics, and calibration performed. "
    "No hardware changes."
)


def _part_names(
    record: RepairRecord, catalog: PartLookup, action: RepairAction
) -> list[str]:
    names = []
    for part_action in record.parts_actions:
        if part_action.action is not action:
            continue
        part = catalog.lookup(part_action.part_id)
        names.append(part.name if part is not None else part_action.part_id)
    return names


def summarize_actions(record: RepairRecord, catalog: PartLookup) -> str:
    """'Replaced Components: X, Y. Repaired Components: Z.' or the default."""
    replaced = _part_names(record, catalog, RepairAction.REPLACED)
    repaired = _part_names(record, catalog, RepairAction.REPAIRED)
    if not replaced and not repaired:
        return MAINTENANCE_SUMMARY

    sentences = []
    if replaced:
        sentences.append(f"Replaced Components: {', '.join(replaced)}.")
    if repaired:
        sentences.append(f"Repaired Components: {', '.join(repaired)}.")
    return " ".join(sentences)


def _product(record: RepairRecord) -> str:
    return f"{record.product_model.value} {record.product_area}"


def build_quote_payload(record: RepairRecord, catalog: PartLookup) -> QuotePayload:
    return QuotePayload(
        customer_name=record.customer.name,
        product=_product(record),
        rma_number=record.rma_number,
        lines=tuple(itemize(record, catalog)),
        labor_cost=record.labor_cost,
        total=total(record, catalog),
        technician_notes=record.technician_notes,
    )


def build_report_payload(record: RepairRecord, catalog: PartLookup) -> ReportPayload:
    return ReportPayload(
        customer_name=record.customer.name,
        product=_product(record),
        product_name=record.product_name or "N/A",
        rma_number=record.rma_number,
        action_summary=summarize_actions(record, catalog),
        technician_notes=record.technician_notes,
    )


async def request_quote(
    generator: TextGenerator, record: RepairRecord, catalog: PartLookup
) -> str:
    """Quote text for `record`. Never raises: failures become QUOTE_ERROR."""
    payload = build_quote_payload(record, catalog)
    try:
        text = await generator.generate_quote(payload)
    except Exception:
        logger.exception("Quote generation failed for record %s", record.id)
        return QUOTE_ERROR
    return text or EMPTY_QUOTE


async def request_report(
    generator: TextGenerator, record: RepairRecord, catalog: PartLookup
) -> ReportText:
    """Email and SMS text for a completed `record`. Never raises."""
    payload = build_report_payload(record, catalog)
    try:
        report = await generator.generate_report(payload)
    except Exception:
        logger.exception("Report generation failed for record %s", record.id)
        return ReportText(email=REPORT_ERROR, sms=SMS_ERROR)
    return ReportText(email=report.email or EMPTY_EMAIL, sms=report.sms or SMS_ERROR)
