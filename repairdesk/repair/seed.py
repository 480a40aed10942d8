from datetime import date

from repairdesk.repair.models import (
    BoxType,
    Customer,
    IntakeAccessories,
    IntakeInspection,
    PartAction,
    ProductModel,
    RepairAction,
    RepairChecklist,
    RepairRecord,
    RepairStatus,
    ShippingMethod,
)

_REPORT_1001 = """Subject: Service Report: Luba 2 3000 (RMA-2023-1001)

Dear Alice Smith,

We are pleased to inform you that the service for your Luba 2 3000 (RMA-2023-1001) has been successfully completed.

**Service Details**
Replaced Components: Right Front Wheel Motor. Repaired Components: Bumper. 

**Test Results**
• The mower was fully tested, including mapping, charging, mowing, and safety checks.
• Customer map has been restored.

**Recommendations**
• Please clean the bottom of the mower regularly.
• Replace the blades when they become blunt.
• Clean the tail panel and the charging pins on the charging dock from time to time.

If there is any logistics information, we will notify you separately.

Thanks for your patience, and thank you for choosing Robomate!

Robomate Service Team"""

_QUOTE_1002 = """Subject: Service Quotation: RMA-2023-1002 Yuka Standard

Dear Bob Jones,

Following our diagnostic assessment of your Yuka Standard (RMA: RMA-2023-1002), we have identified that the battery and cutting disk require replacement.

**Proposed Replacements & Repairs**
- Battery: $600.00
- Left Cutting Disk: $38.00

**Labor Cost**: $100.00

**Total Estimated Cost**: $738.00

Please reply to this email to approve the quotation so we can proceed with the repairs.

Robomate Service Team"""


def seed_records() -> list[RepairRecord]:
    """Records installed when nothing has been persisted yet."""
    return [
        RepairRecord(
            id="1001",
            rma_number="RMA-2023-1001",
            ticket_number="TKT-10552",
            product_model=ProductModel.LUBA_2,
            product_area="3000",
            product_name="Luba-L2-3K-8892",
            customer=Customer(
                name="Alice Smith",
                email="alice.s@example.com",
                phone="021-555-0199",
                address="15 Garden Way, Remuera, Auckland",
            ),
            arrival_date=date(2023, 10, 18),
            entry_date=date(2023, 10, 20),
            status=RepairStatus.COMPLETED,
            fault_description=(
                "Robot drives in circles and stops with error. "
                "Customer suspects wheel issue."
            ),
            parts_actions=[
                PartAction(part_id="m-wheel-r", action=RepairAction.REPLACED),
                PartAction(part_id="a-bumper", action=RepairAction.REPAIRED),
            ],
            technician_notes=(
                "Right wheel motor seized due to debris, replaced. Front bumper was "
                "cracked but repairable with bonding agent. Firmware updated to "
                "latest version."
            ),
            ai_report=_REPORT_1001,
            ai_sms=(
                "Robomate Update: Your Luba 2 (RMA-2023-1001) is repaired and tested. "
                "Please check your email for the service report."
            ),
            technician="Jeff",
            labor_cost=120,
            checklist=RepairChecklist(
                preliminary_check=True,
                map_backup=True,
                disassembly_repair=True,
                post_repair_test=True,
                map_restore=True,
            ),
            intake=IntakeInspection(
                shipping_method=ShippingMethod.FREIGHT,
                box_type=BoxType.ORIGINAL,
                accessories=IntakeAccessories(
                    security_key=True, camera=True, bumper=True, rtk=True, rtk_psu=True
                ),
            ),
        ),
        RepairRecord(
            id="1002",
            rma_number="RMA-2023-1002",
            ticket_number="TKT-10601",
            product_model=ProductModel.YUKA,
            product_area="Standard",
            product_name="Yuka-Y1-STD-4421",
            customer=Customer(
                name="Bob Jones",
                email="bobjones@business.co.nz",
                phone="027-123-4567",
                address="42 Industrial Blvd, Penrose, Auckland",
            ),
            arrival_date=date(2023, 10, 21),
            entry_date=date(2023, 10, 22),
            status=RepairStatus.QUOTED,
            fault_description=(
                "Unit is dead. Won't turn on even after charging for 24 hours. "
                "Cutting disk looks bent."
            ),
            parts_actions=[
                PartAction(part_id="e-battery", action=RepairAction.REPLACED),
                PartAction(part_id="cut-disk", action=RepairAction.REPLACED),
            ],
            technician_notes=(
                "Battery failing to hold charge. Left cutting disk bent. "
                "Quote generated and sent to customer."
            ),
            ai_quote=_QUOTE_1002,
            technician="Jeff",
            labor_cost=100,
            checklist=RepairChecklist(preliminary_check=True, waiting_for_customer=True),
            intake=IntakeInspection(
                shipping_method=ShippingMethod.DROP_OFF,
                box_type=BoxType.CUSTOM,
                accessories=IntakeAccessories(
                    security_key=True,
                    camera=True,
                    bumper=True,
                    psu=True,
                    charging_dock=True,
                    charging_cable=True,
                    cutting_disks=True,
                    cutting_blades=True,
                    other=True,
                ),
                accessories_other="Wrapped in bubble wrap, no box",
            ),
        ),
    ]
