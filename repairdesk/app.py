import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from repairdesk.base.db import async_session, engine
from repairdesk.catalog.router import router as parts_router
from repairdesk.communication import create_generator
from repairdesk.persistence.document_store import SqlDocumentStore, create_schema
from repairdesk.reconciliation.codec import XlsxCodec
from repairdesk.records.router import router as records_router
from repairdesk.service import RepairDeskService
from repairdesk.user.router import router as users_router

logging.basicConfig(level=logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    await create_schema(engine)
    app.state.service = await RepairDeskService.open(
        SqlDocumentStore(async_session), create_generator(), XlsxCodec()
    )
    yield
    await engine.dispose()


app = FastAPI(title="Robomate Repair Desk", lifespan=lifespan)
app.include_router(records_router)
app.include_router(parts_router)
app.include_router(users_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
