from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Response, UploadFile
from pydantic import Field

from repairdesk.auth import get_current_user
from repairdesk.base.dependencies import get_service
from repairdesk.base.schemas import CamelModel
from repairdesk.catalog.models import Part, PartCategory
from repairdesk.errors import ImportFailedError, RecordNotFoundError, RepairValidationError
from repairdesk.reconciliation.codec import XlsxCodec
from repairdesk.service import RepairDeskService
from repairdesk.user.models import User

router = APIRouter(prefix="/parts")


class PartCreate(CamelModel):
    name: str
    category: PartCategory = PartCategory.MOTOR
    price: float = Field(default=0, ge=0)


class PartUpdate(CamelModel):
    name: str | None = None
    category: PartCategory | None = None
    price: float | None = Field(default=None, ge=0)


class PartsImportResponse(CamelModel):
    imported: int
    message: str


@router.get("", response_model=list[Part])
async def list_parts(
    user: User = Depends(get_current_user),
    service: RepairDeskService = Depends(get_service),
) -> list[Part]:
    return service.catalog.parts


@router.post("", response_model=Part, status_code=201)
async def add_part(
    body: PartCreate,
    user: User = Depends(get_current_user),
    service: RepairDeskService = Depends(get_service),
) -> Part:
    try:
        part = await service.add_part(user, body.name, body.category, body.price)
    except RepairValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    if part is None:
        raise HTTPException(status_code=403, detail="Administrator access required")
    return part


@router.get("/export")
async def export_parts(
    user: User = Depends(get_current_user),
    service: RepairDeskService = Depends(get_service),
) -> Response:
    stamp = datetime.now(timezone.utc).date().isoformat()
    return Response(
        content=service.export_parts_file(),
        media_type=XlsxCodec.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="Mammotion_Spare_Parts_{stamp}.xlsx"'
        },
    )


@router.post("/import", response_model=PartsImportResponse)
async def import_parts(
    file: UploadFile,
    user: User = Depends(get_current_user),
    service: RepairDeskService = Depends(get_service),
) -> PartsImportResponse:
    data = await file.read()
    try:
        outcome = await service.import_parts_file(user, data)
    except ImportFailedError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    if outcome.nothing_imported:
        message = "No valid parts found. Please ensure columns are: id, name, category"
    else:
        message = f"Successfully imported {outcome.added} parts."
    return PartsImportResponse(imported=outcome.added, message=message)


@router.patch("/{part_id}", response_model=Part)
async def update_part(
    part_id: str,
    body: PartUpdate,
    user: User = Depends(get_current_user),
    service: RepairDeskService = Depends(get_service),
) -> Part:
    try:
        part = await service.update_part(
            user, part_id, name=body.name, category=body.category, price=body.price
        )
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Part not found")
    except RepairValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    if part is None:
        raise HTTPException(status_code=403, detail="Administrator access required")
    return part


@router.delete("/{part_id}", status_code=204)
async def delete_part(
    part_id: str,
    user: User = Depends(get_current_user),
    service: RepairDeskService = Depends(get_service),
) -> None:
    await service.remove_part(user, part_id)
