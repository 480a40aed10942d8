from collections.abc import AsyncGenerator

import httpx
import pytest
from fastapi import FastAPI

from repairdesk.catalog.router import router as parts_router
from repairdesk.records.router import router as records_router
from repairdesk.service import RepairDeskService
from repairdesk.user.router import router as users_router


@pytest.fixture
def app(service: RepairDeskService) -> FastAPI:
    test_app = FastAPI()
    test_app.include_router(records_router)
    test_app.include_router(parts_router)
    test_app.include_router(users_router)
    test_app.state.service = service
    return test_app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)  # type: ignore[arg-type]
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def admin_header() -> dict[str, str]:
    return {"X-User": "jeff@robomate.co.nz:luba1234"}


@pytest.fixture
async def tech_header(service: RepairDeskService) -> dict[str, str]:
    await service.register("sang@robomate.co.nz", "secret")
    return {"X-User": "sang@robomate.co.nz:secret"}
