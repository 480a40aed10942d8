from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Iterable, Sequence
from typing import Any

from repairdesk.base.schemas import as_text
from repairdesk.catalog.models import Part, PartCategory
from repairdesk.reconciliation.codec import Row

logger = logging.getLogger(__name__)


def parts_to_rows(parts: Iterable[Part]) -> list[Row]:
    return [part.to_document() for part in parts]


def _price(value: Any) -> float:
    try:
        price = float(value)
    except (TypeError, ValueError):
        return 0.0
    return price if price >= 0 else 0.0


def parts_from_rows(rows: Sequence[Row]) -> list[Part]:
    """
    Parts from a spreadsheet with `id, name, category, price` columns.

    Rows without a name are dropped. A missing id is generated, a missing
    category is Accessories and a missing or invalid price is 0.
    """
    parts: list[Part] = []
    for row in rows:
        name = row.get("name")
        if name is None or not str(name).strip():
            logger.warning("Skipping parts row without a name: %s", row)
            continue

        part_id = row.get("id")
        if part_id is None or not str(part_id).strip():
            part_id = f"imported-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"

        category = row.get("category")
        parts.append(
            Part.model_validate(
                {
                    "id": str(as_text(part_id)),
                    "name": str(name).strip(),
                    "category": str(category) if category else PartCategory.ACCESSORIES,
                    "price": _price(row.get("price")),
                }
            )
        )
    return parts
