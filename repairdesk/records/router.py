from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Response, UploadFile
from pydantic import Field

from repairdesk.auth import get_current_user
from repairdesk.base.dependencies import get_service
from repairdesk.base.schemas import CamelModel
from repairdesk.errors import ImportFailedError, RecordNotFoundError, RepairValidationError
from repairdesk.reconciliation.codec import XlsxCodec
from repairdesk.repair import lifecycle
from repairdesk.repair.lifecycle import NextView, TransitionResult
from repairdesk.repair.models import Customer, ProductModel, RepairRecord
from repairdesk.service import RepairDeskService
from repairdesk.user.models import User

router = APIRouter(prefix="/records")


class DraftCreate(CamelModel):
    rma_number: str = "RMA-"
    ticket_number: str | None = None
    customer: Customer = Field(default_factory=Customer)
    product_model: ProductModel = ProductModel.LUBA_2
    product_area: str = "3000"
    product_name: str | None = None
    fault_description: str = ""
    entry_date: date | None = None
    arrival_date: date | None = None


class RecordResponse(RepairRecord):
    total: float


class TransitionResponse(CamelModel):
    record: RecordResponse
    next_view: NextView


class ImportResponse(CamelModel):
    added: int
    skipped: int
    message: str


def _with_total(service: RepairDeskService, record: RepairRecord) -> RecordResponse:
    return RecordResponse.model_validate(
        {**record.model_dump(), "total": service.total(record)}
    )


def _transition_response(
    service: RepairDeskService, result: TransitionResult
) -> TransitionResponse:
    return TransitionResponse(
        record=_with_total(service, result.record), next_view=result.next_view
    )


def _get_record(service: RepairDeskService, record_id: str) -> RepairRecord:
    try:
        return service.get_record(record_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Record not found")


@router.get("", response_model=list[RecordResponse])
async def list_records(
    user: User = Depends(get_current_user),
    service: RepairDeskService = Depends(get_service),
) -> list[RecordResponse]:
    return [_with_total(service, r) for r in service.records]


@router.post("/drafts", response_model=RecordResponse, status_code=201)
async def create_draft(
    body: DraftCreate,
    user: User = Depends(get_current_user),
    service: RepairDeskService = Depends(get_service),
) -> RecordResponse:
    fields = body.model_dump(
        exclude_none=True, exclude={"entry_date", "arrival_date", "customer"}
    )
    draft = lifecycle.new_draft(
        user.email, customer=body.customer, today=body.entry_date, **fields
    )
    if body.arrival_date is not None:
        draft = draft.model_copy(update={"arrival_date": body.arrival_date})
    return _with_total(service, draft)


@router.post("/save-progress", response_model=TransitionResponse)
async def save_progress(
    body: RepairRecord,
    user: User = Depends(get_current_user),
    service: RepairDeskService = Depends(get_service),
) -> TransitionResponse:
    try:
        result = await service.save_progress(body)
    except RepairValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return _transition_response(service, result)


@router.post("/quote", response_model=TransitionResponse)
async def generate_quote(
    body: RepairRecord,
    user: User = Depends(get_current_user),
    service: RepairDeskService = Depends(get_service),
) -> TransitionResponse:
    try:
        result = await service.generate_quote(body)
    except RepairValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return _transition_response(service, result)


@router.post("/complete", response_model=TransitionResponse)
async def complete_repair(
    body: RepairRecord,
    user: User = Depends(get_current_user),
    service: RepairDeskService = Depends(get_service),
) -> TransitionResponse:
    try:
        result = await service.complete_repair(body)
    except RepairValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return _transition_response(service, result)


@router.get("/export")
async def export_records(
    user: User = Depends(get_current_user),
    service: RepairDeskService = Depends(get_service),
) -> Response:
    filename = f"Robomate_Records_{datetime.now(timezone.utc).date().isoformat()}.xlsx"
    return Response(
        content=service.export_file(),
        media_type=XlsxCodec.media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import", response_model=ImportResponse)
async def import_records(
    file: UploadFile,
    user: User = Depends(get_current_user),
    service: RepairDeskService = Depends(get_service),
) -> ImportResponse:
    data = await file.read()
    try:
        outcome = await service.import_file(data)
    except ImportFailedError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return ImportResponse(
        added=outcome.added, skipped=outcome.skipped, message=outcome.message
    )


@router.get("/{record_id}", response_model=RecordResponse)
async def get_record(
    record_id: str,
    user: User = Depends(get_current_user),
    service: RepairDeskService = Depends(get_service),
) -> RecordResponse:
    return _with_total(service, _get_record(service, record_id))


@router.get("/{record_id}/reopen", response_model=RecordResponse)
async def reopen_record(
    record_id: str,
    user: User = Depends(get_current_user),
    service: RepairDeskService = Depends(get_service),
) -> RecordResponse:
    _get_record(service, record_id)
    try:
        draft = service.reopen(record_id)
    except RepairValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return _with_total(service, draft)


@router.post("/{record_id}/approve", response_model=RecordResponse)
async def approve_quote(
    record_id: str,
    user: User = Depends(get_current_user),
    service: RepairDeskService = Depends(get_service),
) -> RecordResponse:
    _get_record(service, record_id)
    try:
        record = await service.approve_quote(record_id)
    except RepairValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return _with_total(service, record)


@router.post("/{record_id}/ship", response_model=RecordResponse)
async def ship_record(
    record_id: str,
    user: User = Depends(get_current_user),
    service: RepairDeskService = Depends(get_service),
) -> RecordResponse:
    _get_record(service, record_id)
    try:
        record = await service.mark_shipped(record_id)
    except RepairValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return _with_total(service, record)


@router.delete("/{record_id}", status_code=204)
async def delete_record(
    record_id: str,
    user: User = Depends(get_current_user),
    service: RepairDeskService = Depends(get_service),
) -> None:
    await service.delete_record(user, record_id)
