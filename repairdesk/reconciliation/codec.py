from __future__ import annotations

import io
import zipfile
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from repairdesk.errors import ImportFailedError

Row = dict[str, Any]


class TabularCodec(ABC):
    """Converts flat rows to and from a spreadsheet file."""

    media_type: str
    extension: str

    @abstractmethod
    def read_rows(self, data: bytes) -> list[Row]: ...

    @abstractmethod
    def write_rows(self, rows: Sequence[Row], sheet_name: str) -> bytes: ...


class XlsxCodec(TabularCodec):
    media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    extension = "xlsx"

    def read_rows(self, data: bytes) -> list[Row]:
        """
        Rows of the first worksheet, keyed by the header row.

        Blank rows are skipped. Raises ImportFailedError if `data` is not a
        readable workbook.
        """
        try:
            workbook = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as exc:
            raise ImportFailedError(
                "Error parsing file. Please ensure it is a valid Excel file."
            ) from exc

        try:
            if not workbook.worksheets:
                return []
            values = workbook.worksheets[0].iter_rows(values_only=True)
            header = next(values, None)
            if header is None:
                return []
            columns = [str(c) if c is not None else None for c in header]

            rows: list[Row] = []
            for raw in values:
                if all(cell is None for cell in raw):
                    continue
                rows.append(
                    {
                        column: cell
                        for column, cell in zip(columns, raw)
                        if column is not None
                    }
                )
            return rows
        finally:
            workbook.close()

    def write_rows(self, rows: Sequence[Row], sheet_name: str) -> bytes:
        columns: list[str] = []
        for row in rows:
            columns.extend(key for key in row if key not in columns)

        workbook = Workbook()
        sheet = workbook.active
        sheet.title = sheet_name
        sheet.append(columns)
        for row in rows:
            sheet.append([row.get(column) for column in columns])

        buffer = io.BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()
