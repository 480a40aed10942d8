"""
Flat-row export and import of the record collection.

Exported rows carry every scalar field, a denormalized customer/parts summary
for people reading the spreadsheet, and the nested structures as JSON text in
their own columns. Import trusts the JSON columns first and falls back to the
flat columns when they are missing or unreadable.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from repairdesk.base.schemas import as_text
from repairdesk.reconciliation.codec import Row
from repairdesk.repair.models import (
    Customer,
    IntakeInspection,
    PartAction,
    RepairChecklist,
    RepairRecord,
)

logger = logging.getLogger(__name__)

# Scalar columns read back on import, in export order.
SCALAR_COLUMNS: tuple[str, ...] = (
    "id",
    "rmaNumber",
    "ticketNumber",
    "entryDate",
    "arrivalDate",
    "productModel",
    "productArea",
    "productName",
    "faultDescription",
    "technicianNotes",
    "status",
    "laborCost",
    "aiReport",
    "aiSms",
    "aiQuote",
    "technician",
)

_PART_ACTIONS = TypeAdapter(list[PartAction])

M = TypeVar("M", RepairChecklist, IntakeInspection)


@dataclass(frozen=True)
class ImportOutcome:
    added: int
    skipped: int = 0

    @property
    def nothing_imported(self) -> bool:
        return self.added == 0

    @property
    def message(self) -> str:
        if self.nothing_imported:
            return "No new records found in file (all IDs already exist)."
        return f"Successfully imported {self.added} new records."


def record_to_row(record: RepairRecord) -> Row:
    document = record.to_document()
    customer = record.customer
    return {
        **document,
        "customerName": customer.name,
        "customerEmail": customer.email,
        "customerPhone": customer.phone,
        "customerAddress": customer.address,
        "partsSummary": ", ".join(
            f"{a.part_id}:{a.action.value}" for a in record.parts_actions
        ),
        "customer": json.dumps(document["customer"]),
        "partsActions": json.dumps(document["partsActions"]),
        "checklist": json.dumps(document.get("checklist", {})),
        "intake": json.dumps(document.get("intake", {})),
    }


def export_rows(records: Iterable[RepairRecord]) -> list[Row]:
    return [record_to_row(r) for r in records]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _load_blob(value: Any) -> Any:
    """Parse a JSON text column; None if absent or unreadable."""
    if isinstance(value, (dict, list)):
        return value
    if _is_blank(value) or not isinstance(value, str):
        return None
    try:
        return json.loads(value)
    except ValueError:
        return None


def _optional_text(value: Any) -> str | None:
    return None if value is None else str(as_text(value))


def _customer(values: Row) -> Customer:
    blob = _load_blob(values.get("customer"))
    if isinstance(blob, dict):
        try:
            return Customer.model_validate(blob)
        except ValidationError:
            pass
    return Customer(
        name=str(values.get("customerName", "")),
        email=str(values.get("customerEmail", "")),
        phone=values.get("customerPhone", ""),
        address=_optional_text(values.get("customerAddress")),
    )


def _parts_actions(values: Row) -> list[PartAction]:
    blob = _load_blob(values.get("partsActions"))
    if not isinstance(blob, list):
        return []
    try:
        return _PART_ACTIONS.validate_python(blob)
    except ValidationError:
        return []


def _nested(values: Row, column: str, model: type[M]) -> M | None:
    blob = _load_blob(values.get(column))
    if not isinstance(blob, dict) or not blob:
        return None
    try:
        return model.model_validate(blob)
    except ValidationError:
        return None


def row_to_record(row: Row) -> RepairRecord:
    """
    Rebuild a record from an exported (or hand-edited) row.

    Raises ValidationError when the row lacks what a record cannot do without
    (id, RMA number, entry date, product model).
    """
    values = {key: value for key, value in row.items() if not _is_blank(value)}
    fields = {column: values[column] for column in SCALAR_COLUMNS if column in values}
    if "id" in fields:
        fields["id"] = str(as_text(fields["id"]))
    if "productArea" in fields:
        fields["productArea"] = str(as_text(fields["productArea"]))
    for column in ("entryDate", "arrivalDate"):
        if isinstance(fields.get(column), datetime):
            fields[column] = fields[column].date()

    return RepairRecord.model_validate(
        {
            **fields,
            "customer": _customer(values),
            "partsActions": _parts_actions(values),
            "checklist": _nested(values, "checklist", RepairChecklist),
            "intake": _nested(values, "intake", IntakeInspection),
        }
    )


def import_rows(rows: Sequence[Row]) -> tuple[list[RepairRecord], int]:
    """Parse every row; rows that cannot become a record are skipped."""
    records: list[RepairRecord] = []
    skipped = 0
    for index, row in enumerate(rows, start=2):
        try:
            records.append(row_to_record(row))
        except ValidationError as exc:
            skipped += 1
            logger.warning("Skipping spreadsheet row %d: %s", index, exc)
    return records, skipped


def merge_records(
    existing: Sequence[RepairRecord], imported: Iterable[RepairRecord]
) -> list[RepairRecord]:
    """
    Imported records whose id is not yet in `existing`, in file order.

    Records whose id is already present are dropped, never overwritten. Only
    the first of several rows sharing a new id is kept.
    """
    seen = {r.id for r in existing}
    fresh: list[RepairRecord] = []
    for record in imported:
        if record.id in seen:
            continue
        seen.add(record.id)
        fresh.append(record)
    return fresh
