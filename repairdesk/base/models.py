from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, Dialect, String, TypeDecorator, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from pydantic import JsonValue

from repairdesk.base.schemas import PydanticJSONB


class UTCDateTime(TypeDecorator):
    impl = DateTime
    cache_ok = True

    def process_bind_param(
        self, value: datetime | None, dialect: Dialect
    ) -> datetime | None:
        if value is None:
            return value

        if not value.tzinfo or value.tzinfo.utcoffset(value) is None:
            raise TypeError("UTCDateTime must be a timezone-aware datetime")

        return value.astimezone(timezone.utc).replace(tzinfo=None)

    def process_result_value(
        self, value: datetime | None, dialect: Dialect
    ) -> datetime | None:
        if value is None:
            return value

        return value.replace(tzinfo=timezone.utc)


class BaseDbModel(DeclarativeBase):
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        server_default=func.now(),
        default=lambda _: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(), onupdate=lambda _: datetime.now(timezone.utc)
    )


class Document(BaseDbModel):
    """One persisted JSON document (the records, the parts or the users list)."""

    __tablename__ = "documents"

    key: Mapped[str] = mapped_column(String, primary_key=True)
    body: Mapped[Any] = mapped_column(PydanticJSONB(JsonValue), nullable=False)
