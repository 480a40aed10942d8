from typing import Any, Generic, TypeVar

import sqlalchemy as sa
from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic.alias_generators import to_camel
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.engine import Dialect
from sqlalchemy.sql.type_api import TypeEngine
from sqlalchemy.types import TypeDecorator

T = TypeVar("T")


class PydanticJSONB(TypeDecorator, Generic[T]):
    """
    SQLAlchemy type that stores Pydantic v2-validated data in JSON/JSONB.

    - Uses JSONB on PostgreSQL, JSON elsewhere (SQLite in tests and local runs).
    - `T` is anything a TypeAdapter accepts, e.g. `JsonValue` for free-form
      documents or `list[RepairRecord]` for a typed column.
    """

    impl = sa.JSON
    cache_ok: bool = True

    pydantic_type: Any
    _adapter: TypeAdapter[T]

    def __init__(self, pydantic_type: Any) -> None:
        super().__init__()
        self.pydantic_type = pydantic_type
        self._adapter = TypeAdapter(pydantic_type)

    def load_dialect_impl(self, dialect: Dialect) -> TypeEngine[Any]:
        if dialect.name == "postgresql":
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(sa.JSON())

    def process_bind_param(
        self,
        value: T | BaseModel | dict[str, Any] | None,
        dialect: Dialect,
    ) -> Any | None:
        if value is None:
            return None
        model_value: T = self._adapter.validate_python(value)
        return self._adapter.dump_python(model_value, mode="json")

    def process_result_value(
        self,
        value: Any,
        dialect: Dialect,
    ) -> T | None:
        if value is None:
            return None
        return self._adapter.validate_python(value)


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire and in stored documents."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def as_text(value: Any) -> Any:
    """Spreadsheet numbers as text: 3000.0 -> '3000', 1.5 -> '1.5'."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)
