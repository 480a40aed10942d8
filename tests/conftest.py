from collections.abc import AsyncGenerator, Callable
from datetime import date
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from repairdesk.catalog.catalog import Catalog
from repairdesk.catalog.models import Part, PartCategory
from repairdesk.communication.interface import ReportText, TextGenerator
from repairdesk.persistence.document_store import SqlDocumentStore, create_schema
from repairdesk.repair.models import (
    Customer,
    PartAction,
    ProductModel,
    RepairAction,
    RepairRecord,
    RepairStatus,
)
from repairdesk.service import RepairDeskService
from repairdesk.user.models import User


@pytest.fixture
async def db_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'repairdesk.db'}")
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def document_store(
    session_factory: async_sessionmaker[AsyncSession],
) -> SqlDocumentStore:
    return SqlDocumentStore(session_factory)


@pytest.fixture
def mock_generator() -> AsyncMock:
    """Text generator that always answers with fixed text."""
    generator = AsyncMock(spec=TextGenerator)
    generator.generate_quote = AsyncMock(return_value="Dear customer, here is your quote.")
    generator.generate_report = AsyncMock(
        return_value=ReportText(email="Your mower is fixed.", sms="Mower fixed.")
    )
    return generator


@pytest.fixture
async def service(
    document_store: SqlDocumentStore, mock_generator: AsyncMock
) -> RepairDeskService:
    return await RepairDeskService.open(document_store, mock_generator)


@pytest.fixture
def admin() -> User:
    return User(email="jeff@robomate.co.nz", password="luba1234", is_admin=True)


@pytest.fixture
def technician() -> User:
    return User(email="sang@robomate.co.nz", password="secret", is_admin=False)


@pytest.fixture
def catalog() -> Catalog:
    return Catalog(
        [
            Part(id="m-wheel-r", name="Right Front Wheel Motor", category=PartCategory.MOTOR, price=320),
            Part(id="e-battery", name="Battery", category=PartCategory.ELECTRONICS, price=600),
            Part(id="a-bumper", name="Bumper", category=PartCategory.ACCESSORIES, price=138),
        ]
    )


@pytest.fixture
def make_record() -> Callable[..., RepairRecord]:
    def _make(
        record_id: str = "2001",
        *,
        status: RepairStatus = RepairStatus.PENDING,
        actions: tuple[tuple[str, RepairAction], ...] = (),
        labor_cost: float = 0,
        notes: str = "",
        **fields: Any,
    ) -> RepairRecord:
        return RepairRecord(
            id=record_id,
            rma_number=f"RMA-{record_id}",
            entry_date=date(2024, 3, 1),
            customer=Customer(name="Carol White", email="carol@example.com", phone="021-000"),
            product_model=ProductModel.LUBA_2,
            product_area="3000",
            parts_actions=[PartAction(part_id=p, action=a) for p, a in actions],
            labor_cost=labor_cost,
            technician_notes=notes,
            status=status,
            **fields,
        )

    return _make
