import enum
from typing import Any

from pydantic import Field, field_validator

from repairdesk.base.schemas import CamelModel, as_text


class PartCategory(enum.Enum):
    MOTOR = "Motor"
    ELECTRONICS = "Electronics"
    CHASSIS = "Chassis"
    CUTTING = "Cutting"
    ACCESSORIES = "Accessories"
    OTHER = "other"


_CATEGORY_VALUES = {c.value for c in PartCategory}


class Part(CamelModel):
    id: str
    name: str
    category: PartCategory = PartCategory.ACCESSORIES
    price: float = Field(default=0, ge=0)

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value: Any) -> Any:
        return as_text(value)

    @field_validator("category", mode="before")
    @classmethod
    def _unknown_category_is_other(cls, value: Any) -> Any:
        if isinstance(value, PartCategory):
            return value
        if value not in _CATEGORY_VALUES:
            return PartCategory.OTHER
        return value
