from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass
from datetime import date
from typing import Any

from repairdesk.errors import RepairValidationError
from repairdesk.repair.models import (
    Customer,
    IntakeInspection,
    PartAction,
    ProductModel,
    RepairAction,
    RepairChecklist,
    RepairRecord,
    RepairStatus,
)

logger = logging.getLogger(__name__)

DEFAULT_LABOR_COST = 100.0

_S = RepairStatus

# Statuses a record may move to from each status. A status listed under itself
# can be re-entered, which regenerates its text.
_TRANSITIONS: dict[RepairStatus, frozenset[RepairStatus]] = {
    _S.PENDING: frozenset({_S.IN_PROGRESS, _S.QUOTED, _S.COMPLETED}),
    _S.IN_PROGRESS: frozenset({_S.QUOTED, _S.COMPLETED}),
    _S.QUOTED: frozenset({_S.QUOTED, _S.QUOTE_APPROVED, _S.COMPLETED}),
    _S.QUOTE_APPROVED: frozenset({_S.QUOTED, _S.COMPLETED}),
    _S.COMPLETED: frozenset({_S.COMPLETED, _S.SHIPPED}),
    _S.SHIPPED: frozenset(),
}

TERMINAL_STATUSES = frozenset(s for s, targets in _TRANSITIONS.items() if not targets)


class NextView(enum.Enum):
    """Where the workflow goes after a transition."""

    RECORD_LIST = "record-list"
    REPORT_VIEW = "report-view"


@dataclass(frozen=True)
class TransitionResult:
    record: RepairRecord
    next_view: NextView


def can_transition(current: RepairStatus, target: RepairStatus) -> bool:
    return target in _TRANSITIONS[current]


def ensure_transition(current: RepairStatus, target: RepairStatus) -> None:
    if not can_transition(current, target):
        raise RepairValidationError(
            f"A {current.value} record cannot be moved to {target.value}"
        )


def technician_name(email: str) -> str:
    """Display name from an email's local part: 'sang@x.nz' -> 'Sang'."""
    local = email.split("@")[0]
    return local[:1].upper() + local[1:]


def new_draft(
    author_email: str,
    *,
    rma_number: str = "RMA-",
    product_model: ProductModel = ProductModel.LUBA_2,
    product_area: str = "3000",
    customer: Customer | None = None,
    today: date | None = None,
    **fields: Any,
) -> RepairRecord:
    """
    Start a new job for the technician identified by `author_email`.

    The draft is Pending and not stored anywhere until one of the transitions
    below is applied to it.
    """
    today = today or date.today()
    values: dict[str, Any] = {
        "id": str(int(time.time() * 1000)),
        "rma_number": rma_number,
        "entry_date": today,
        "arrival_date": today,
        "customer": customer or Customer(),
        "product_model": product_model,
        "product_area": product_area,
        "product_name": "Luba-",
        "labor_cost": DEFAULT_LABOR_COST,
        "checklist": RepairChecklist(),
        "intake": IntakeInspection(),
        **fields,
        "status": RepairStatus.PENDING,
        "technician": technician_name(author_email),
    }
    return RepairRecord.model_validate(values)


def reopen(record: RepairRecord) -> RepairRecord:
    """
    Continue an existing job (typically a Quoted one) as an editable draft.

    Status, technician and previously generated text are carried over
    unchanged; only a later transition changes them.
    """
    if record.status in TERMINAL_STATUSES:
        raise RepairValidationError(f"A {record.status.value} record cannot be edited")
    return record.model_copy(deep=True)


def toggle_part(record: RepairRecord, part_id: str) -> RepairRecord:
    """Select a part as replaced, or deselect it if it is already selected."""
    if record.action_for(part_id) is not None:
        actions = [a for a in record.parts_actions if a.part_id != part_id]
    else:
        actions = [*record.parts_actions, PartAction(part_id=part_id)]
    return record.model_copy(update={"parts_actions": actions})


def set_part_action(
    record: RepairRecord, part_id: str, action: RepairAction
) -> RepairRecord:
    actions = [
        a.model_copy(update={"action": action}) if a.part_id == part_id else a
        for a in record.parts_actions
    ]
    return record.model_copy(update={"parts_actions": actions})


def toggle_checklist_flag(record: RepairRecord, flag: str) -> RepairRecord:
    checklist = record.checklist or RepairChecklist()
    current = getattr(checklist, flag, None)
    if not isinstance(current, bool):
        raise RepairValidationError(f"'{flag}' is not a checklist flag")
    return record.model_copy(
        update={"checklist": checklist.model_copy(update={flag: not current})}
    )


def toggle_intake_accessory(record: RepairRecord, accessory: str) -> RepairRecord:
    intake = record.intake or IntakeInspection()
    accessories = intake.accessories
    current = getattr(accessories, accessory, None)
    if not isinstance(current, bool):
        raise RepairValidationError(f"'{accessory}' is not an intake accessory")
    updated = accessories.model_copy(update={accessory: not current})
    return record.model_copy(
        update={"intake": intake.model_copy(update={"accessories": updated})}
    )


def save_progress(record: RepairRecord) -> TransitionResult:
    """Keep working on a job: Pending becomes In Progress, other statuses stay."""
    if record.status in TERMINAL_STATUSES:
        raise RepairValidationError(
            f"A {record.status.value} record cannot be saved as in progress"
        )

    status = record.status
    if status is RepairStatus.PENDING:
        status = RepairStatus.IN_PROGRESS

    logger.info("Record %s saved (%s)", record.id, status.value)
    return TransitionResult(
        record=record.model_copy(update={"status": status}),
        next_view=NextView.RECORD_LIST,
    )


def check_quotable(record: RepairRecord) -> None:
    ensure_transition(record.status, RepairStatus.QUOTED)
    if not record.parts_actions and record.labor_cost == 0:
        raise RepairValidationError(
            "Please select parts or add labor cost to generate a quote."
        )


def check_completable(record: RepairRecord) -> None:
    ensure_transition(record.status, RepairStatus.COMPLETED)
    if not record.technician_notes.strip():
        raise RepairValidationError(
            "Technician notes are required to complete a repair."
        )


def mark_quoted(record: RepairRecord, quote_text: str) -> TransitionResult:
    check_quotable(record)
    logger.info("Record %s quoted", record.id)
    return TransitionResult(
        record=record.model_copy(
            update={"status": RepairStatus.QUOTED, "ai_quote": quote_text}
        ),
        next_view=NextView.REPORT_VIEW,
    )


def mark_completed(
    record: RepairRecord, report_text: str, sms_text: str
) -> TransitionResult:
    check_completable(record)
    logger.info("Record %s completed", record.id)
    return TransitionResult(
        record=record.model_copy(
            update={
                "status": RepairStatus.COMPLETED,
                "ai_report": report_text,
                "ai_sms": sms_text,
            }
        ),
        next_view=NextView.REPORT_VIEW,
    )


def approve_quote(record: RepairRecord) -> RepairRecord:
    ensure_transition(record.status, RepairStatus.QUOTE_APPROVED)
    return record.model_copy(update={"status": RepairStatus.QUOTE_APPROVED})


def mark_shipped(record: RepairRecord) -> RepairRecord:
    ensure_transition(record.status, RepairStatus.SHIPPED)
    return record.model_copy(update={"status": RepairStatus.SHIPPED})
