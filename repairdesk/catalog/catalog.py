from __future__ import annotations

import random
import time
from collections.abc import Iterable, Iterator

from repairdesk.catalog.models import Part, PartCategory
from repairdesk.errors import RecordNotFoundError, RepairValidationError


class Catalog:
    """The spare parts that can be replaced or repaired on a job."""

    def __init__(self, parts: Iterable[Part] = ()) -> None:
        self._parts: list[Part] = list(parts)

    def __iter__(self) -> Iterator[Part]:
        return iter(self._parts)

    def __len__(self) -> int:
        return len(self._parts)

    def __contains__(self, part_id: object) -> bool:
        return any(p.id == part_id for p in self._parts)

    @property
    def parts(self) -> list[Part]:
        return list(self._parts)

    def lookup(self, part_id: str) -> Part | None:
        """Return the part with `part_id`, or None if it was removed."""
        return next((p for p in self._parts if p.id == part_id), None)

    def by_category(self) -> dict[PartCategory, list[Part]]:
        grouped: dict[PartCategory, list[Part]] = {}
        for part in self._parts:
            grouped.setdefault(part.category, []).append(part)
        return grouped

    def add(
        self,
        name: str,
        category: PartCategory = PartCategory.MOTOR,
        price: float = 0,
    ) -> Part:
        name = name.strip()
        if not name:
            raise RepairValidationError("Part name must not be empty")

        part = Part(
            id=f"custom-{int(time.time() * 1000)}-{random.randrange(1000)}",
            name=name,
            category=category,
            price=price,
        )
        self._parts.append(part)
        return part

    def update(
        self,
        part_id: str,
        *,
        name: str | None = None,
        category: PartCategory | None = None,
        price: float | None = None,
    ) -> Part:
        """Rename, recategorize or reprice a part in place."""
        part = self.lookup(part_id)
        if part is None:
            raise RecordNotFoundError("Part", part_id)

        changes: dict[str, object] = {}
        if name is not None:
            if not name.strip():
                raise RepairValidationError("Part name must not be empty")
            changes["name"] = name.strip()
        if category is not None:
            changes["category"] = category
        if price is not None:
            changes["price"] = price

        updated = Part.model_validate({**part.model_dump(), **changes})
        self._parts[self._parts.index(part)] = updated
        return updated

    def remove(self, part_id: str) -> bool:
        before = len(self._parts)
        self._parts = [p for p in self._parts if p.id != part_id]
        return len(self._parts) != before

    def replace(self, parts: Iterable[Part]) -> None:
        self._parts = list(parts)
