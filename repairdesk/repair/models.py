from __future__ import annotations

import enum
from datetime import date
from typing import Annotated

from pydantic import BeforeValidator, Field, field_validator

from repairdesk.base.schemas import CamelModel, as_text


class ProductModel(enum.Enum):
    LUBA_1 = "Luba 1"
    LUBA_2 = "Luba 2"
    LUBA_2X = "Luba 2X"
    YUKA = "Yuka"
    LUBA_MINI = "Luba Mini"
    YUKA_MINI = "Yuka Mini"


PRODUCT_AREAS: tuple[str, ...] = ("1000", "3000", "5000", "10000", "Standard", "Pro")


class RepairStatus(enum.Enum):
    PENDING = "Pending"
    QUOTED = "Quoted"
    QUOTE_APPROVED = "Quote Approved"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    SHIPPED = "Shipped"


class RepairAction(enum.Enum):
    REPLACED = "replaced"
    REPAIRED = "repaired"


class ShippingMethod(enum.Enum):
    DROP_OFF = "Drop Off"
    FREIGHT = "Freight"


class BoxType(enum.Enum):
    ORIGINAL = "Original"
    CUSTOM = "Custom"
    PALLET = "Pallet"


# Spreadsheets hand numeric-looking ids, areas and phone numbers back as numbers.
Text = Annotated[str, BeforeValidator(as_text)]


class Customer(CamelModel):
    name: str = ""
    email: str = ""
    phone: Text = ""
    address: str | None = None


class PartAction(CamelModel):
    part_id: Text
    action: RepairAction = RepairAction.REPLACED


class RepairChecklist(CamelModel):
    """Technician workflow flags. Advisory: they never gate a status change."""

    preliminary_check: bool = False
    map_backup: bool = False
    disassembly_repair: bool = False
    post_repair_test: bool = False
    map_restore: bool = False
    waiting_for_customer: bool = False
    waiting_for_parts: bool = False
    waiting_for_parts_notes: str = ""
    waiting_for_full_replacement_approval: bool = False


class IntakeAccessories(CamelModel):
    cutting_disks: bool = False
    cutting_blades: bool = False
    security_key: bool = False
    camera: bool = False
    bumper: bool = False
    psu: bool = False
    charging_dock: bool = False
    charging_cable: bool = False
    rtk: bool = False
    rtk_psu: bool = False
    other: bool = False


class IntakeInspection(CamelModel):
    shipping_method: ShippingMethod = ShippingMethod.FREIGHT
    box_type: BoxType = BoxType.ORIGINAL
    accessories: IntakeAccessories = Field(default_factory=IntakeAccessories)
    accessories_other: str = ""


class RepairRecord(CamelModel):
    id: Text
    rma_number: Text
    ticket_number: Text | None = None
    entry_date: date
    arrival_date: date | None = None
    customer: Customer = Field(default_factory=Customer)
    product_model: ProductModel
    product_area: Text
    product_name: Text | None = None
    fault_description: str = ""
    parts_actions: list[PartAction] = Field(default_factory=list)
    technician_notes: str = ""
    labor_cost: float = Field(default=0, ge=0)
    checklist: RepairChecklist | None = None
    intake: IntakeInspection | None = None
    status: RepairStatus = RepairStatus.PENDING
    ai_report: str | None = None
    ai_sms: str | None = None
    ai_quote: str | None = None
    # Display name derived from the creating technician's email. Never recomputed.
    technician: str | None = None

    @field_validator("parts_actions")
    @classmethod
    def _one_action_per_part(cls, actions: list[PartAction]) -> list[PartAction]:
        seen: set[str] = set()
        unique: list[PartAction] = []
        for action in actions:
            if action.part_id in seen:
                continue
            seen.add(action.part_id)
            unique.append(action)
        return unique

    def action_for(self, part_id: str) -> PartAction | None:
        return next((a for a in self.parts_actions if a.part_id == part_id), None)
