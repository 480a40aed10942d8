from repairdesk.catalog.catalog import Catalog
from repairdesk.catalog.models import PartCategory
from repairdesk.reconciliation.parts import parts_from_rows, parts_to_rows


class TestPartsToRows:
    def test_columns(self, catalog: Catalog) -> None:
        rows = parts_to_rows(catalog)

        assert rows[0] == {
            "id": "m-wheel-r",
            "name": "Right Front Wheel Motor",
            "category": "Motor",
            "price": 320.0,
        }


class TestPartsFromRows:
    def test_reads_rows(self) -> None:
        parts = parts_from_rows(
            [{"id": "x1", "name": "Blade", "category": "Cutting", "price": "12.5"}]
        )

        assert len(parts) == 1
        assert parts[0].id == "x1"
        assert parts[0].category is PartCategory.CUTTING
        assert parts[0].price == 12.5

    def test_drops_rows_without_name(self) -> None:
        parts = parts_from_rows([{"id": "x1"}, {"id": "x2", "name": "  "}])

        assert parts == []

    def test_fills_in_missing_values(self) -> None:
        [part] = parts_from_rows([{"name": "Mystery", "price": "n/a"}])

        assert part.id.startswith("imported-")
        assert part.category is PartCategory.ACCESSORIES
        assert part.price == 0

    def test_float_id_from_spreadsheet(self) -> None:
        [part] = parts_from_rows([{"id": 12.0, "name": "Clip"}])

        assert part.id == "12"

    def test_unknown_category(self) -> None:
        [part] = parts_from_rows([{"id": 7, "name": "Widget", "category": "Gizmos"}])

        assert part.id == "7"
        assert part.category is PartCategory.OTHER
