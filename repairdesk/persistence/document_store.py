from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from pydantic import JsonValue
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from repairdesk.base.models import BaseDbModel, Document

logger = logging.getLogger(__name__)


class DocumentStore(ABC):
    """Durable key -> JSON document storage."""

    @abstractmethod
    async def load(self, key: str) -> Any | None: ...

    @abstractmethod
    async def save(self, key: str, value: JsonValue) -> None: ...

    @abstractmethod
    async def delete(self, key: str) -> None: ...


class SqlDocumentStore(DocumentStore):
    """Documents kept as rows of the `documents` table, one row per key."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def load(self, key: str) -> Any | None:
        async with self._session_factory() as session:
            document = await session.get(Document, key)
            return document.body if document is not None else None

    async def save(self, key: str, value: JsonValue) -> None:
        async with self._session_factory() as session:
            try:
                document = await session.get(Document, key)
                if document is None:
                    session.add(Document(key=key, body=value))
                else:
                    document.body = value
                await session.commit()
            except Exception:
                await session.rollback()
                raise
        logger.debug("Saved document %s", key)

    async def delete(self, key: str) -> None:
        async with self._session_factory() as session:
            document = await session.get(Document, key)
            if document is not None:
                await session.delete(document)
                await session.commit()
                logger.info("Deleted document %s", key)


async def create_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(BaseDbModel.metadata.create_all)
