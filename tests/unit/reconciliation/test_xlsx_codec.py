import pytest

from repairdesk.errors import ImportFailedError
from repairdesk.reconciliation.codec import XlsxCodec


@pytest.fixture
def codec() -> XlsxCodec:
    return XlsxCodec()


class TestXlsxCodec:
    def test_written_rows_read_back(self, codec: XlsxCodec) -> None:
        data = codec.write_rows(
            [{"id": "1", "name": "Battery"}, {"id": "2", "price": 38}],
            "Spare Parts",
        )

        rows = codec.read_rows(data)

        assert [row["id"] for row in rows] == ["1", "2"]
        assert rows[0]["name"] == "Battery"
        assert rows[0].get("price") is None
        assert rows[1]["price"] == 38

    def test_empty_sheet(self, codec: XlsxCodec) -> None:
        assert codec.read_rows(codec.write_rows([], "Repair Records")) == []

    def test_rejects_non_workbook(self, codec: XlsxCodec) -> None:
        with pytest.raises(ImportFailedError):
            codec.read_rows(b"id,name\n1,Battery\n")
