from fastapi import Request

from repairdesk.service import RepairDeskService


def get_service(request: Request) -> RepairDeskService:
    service: RepairDeskService = request.app.state.service
    return service
