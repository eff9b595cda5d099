from __future__ import annotations

import logging
from typing import Any

from ..models.cell_value import (
    BooleanValue,
    CellValue,
    EmptyValue,
    NumberValue,
    RichTextValue,
    TextRun,
    TextValue,
)

"""CellAccess backed by the Google Sheets v4 API.

Cell reads ask for the grid data of a single cell with the fields that carry
links: `hyperlink` (whole-cell link, set by =HYPERLINK() or a link on the
entire cell) and `textFormatRuns` (rich text; each run may have
format.link.uri). The API omits startIndex for a run starting at 0.
"""

__all__ = [
    "CELL_FIELDS",
    "SheetsCellAccess",
    "cell_from_api",
    "column_letter",
    "quote_sheet_name",
]

logger = logging.getLogger(__name__)

CELL_FIELDS = "sheets(data(rowData(values(effectiveValue,formattedValue,hyperlink,textFormatRuns))))"


def column_letter(column: int) -> str:
    """1-based column index -> A1 column letters (1 -> A, 27 -> AA)."""
    if column < 1:
        raise ValueError(f"column must be >= 1: {column}")
    letters = ""
    while column:
        column, rem = divmod(column - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def quote_sheet_name(name: str) -> str:
    """Quote a sheet name for A1 notation (embedded apostrophes are doubled)."""
    return "'" + name.replace("'", "''") + "'"


def _runs_from_api(text: str, runs: list[dict[str, Any]]) -> tuple[TextRun, ...]:
    # startIndex counts UTF-16 code units, so slice the UTF-16 encoding
    encoded = text.encode("utf-16-le")
    units = len(encoded) // 2
    result: list[TextRun] = []
    for i, run in enumerate(runs):
        start = run.get("startIndex", 0)
        end = runs[i + 1].get("startIndex", units) if i + 1 < len(runs) else units
        text_slice = encoded[start * 2:end * 2].decode("utf-16-le", errors="replace")
        uri = run.get("format", {}).get("link", {}).get("uri")
        result.append(TextRun(text=text_slice, link=uri or None))
    return tuple(result)


def cell_from_api(cell: dict[str, Any]) -> CellValue:
    """Convert a CellData resource into a CellValue."""
    formatted = cell.get("formattedValue", "")
    runs = cell.get("textFormatRuns") or []
    hyperlink = cell.get("hyperlink")

    if runs:
        return RichTextValue(runs=_runs_from_api(formatted, runs), link=hyperlink or None)
    if hyperlink:
        return RichTextValue(runs=(TextRun(text=formatted),) if formatted else (), link=hyperlink)

    effective = cell.get("effectiveValue") or {}
    if "stringValue" in effective:
        return TextValue(effective["stringValue"])
    if "numberValue" in effective:
        return NumberValue(effective["numberValue"])
    if "boolValue" in effective:
        return BooleanValue(effective["boolValue"])
    return EmptyValue()


class SheetsCellAccess:
    """Cell reads and writes for one sheet of a spreadsheet."""

    def __init__(self, service: Any, spreadsheet_id: str, sheet_name: str) -> None:
        self.service = service
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name

    def _a1(self, row: int, column: int) -> str:
        return f"{quote_sheet_name(self.sheet_name)}!{column_letter(column)}{row}"

    def read_cell(self, row: int, column: int) -> CellValue:
        result = self.service.spreadsheets().get(
            spreadsheetId=self.spreadsheet_id,
            ranges=[self._a1(row, column)],
            includeGridData=True,
            fields=CELL_FIELDS,
        ).execute()
        for sheet in result.get("sheets", []):
            for data in sheet.get("data", []):
                for row_data in data.get("rowData", []):
                    for cell in row_data.get("values", []):
                        return cell_from_api(cell)
        return EmptyValue()

    def write_value(self, row: int, column: int, value: str) -> None:
        self.service.spreadsheets().values().update(
            spreadsheetId=self.spreadsheet_id,
            range=self._a1(row, column),
            valueInputOption="RAW",
            body={"values": [[value]]},
        ).execute()
        logger.debug(f"wrote {self._a1(row, column)}={value!r}")

    def read_column(self, column: int, first_row: int) -> list[str | None]:
        letter = column_letter(column)
        result = self.service.spreadsheets().values().get(
            spreadsheetId=self.spreadsheet_id,
            range=f"{quote_sheet_name(self.sheet_name)}!{letter}{first_row}:{letter}",
            majorDimension="ROWS",
        ).execute()
        return [(row[0] if row and row[0] != "" else None) for row in result.get("values", [])]
