"""Spreadsheet ingestion: headers, row preview, and a text rendering for the oracle."""

import io
from dataclasses import dataclass, field
from typing import Any

import openpyxl

from docpipe.documents.exceptions import SpreadsheetReadError
from docpipe.documents.models import SpreadsheetInfo

PREVIEW_ROWS = 30
RAW_TEXT_ROWS = 50


@dataclass(frozen=True)
class SpreadsheetContent:
    sheet_names: list[str]
    headers: list[str]
    rows: list[dict[str, Any]] = field(default_factory=list)
    row_count: int = 0
    column_count: int = 0

    @property
    def info(self) -> SpreadsheetInfo:
        return SpreadsheetInfo(
            sheet_names=list(self.sheet_names),
            row_count=self.row_count,
            column_count=self.column_count,
            headers=[h for h in self.headers if h],
        )


def read_spreadsheet(data: bytes) -> SpreadsheetContent:
    """Read the first worksheet: header row plus data rows keyed by header.

    Raises:
        SpreadsheetReadError: if the workbook cannot be opened or has no sheets.
    """
    try:
        workbook = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except Exception as exc:
        raise SpreadsheetReadError(f"Failed to open spreadsheet: {exc}") from exc
    try:
        sheet_names = list(workbook.sheetnames)
        if not sheet_names:
            raise SpreadsheetReadError("Spreadsheet has no sheets")
        sheet = workbook[sheet_names[0]]
        table = [list(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()

    while table and all(_is_empty(value) for value in table[-1]):
        table.pop()
    if not table:
        return SpreadsheetContent(sheet_names=sheet_names, headers=[])

    header_row, *data_rows = table
    headers = [_cell_text(value) for value in header_row]
    rows = [_row_to_dict(headers, row) for row in data_rows]
    return SpreadsheetContent(
        sheet_names=sheet_names,
        headers=headers,
        rows=[row for row in rows if row],
        row_count=len(table),
        column_count=max(len(row) for row in table),
    )


def render_rows(rows: list[dict[str, Any]], limit: int = RAW_TEXT_ROWS) -> str:
    return "\n".join(
        " | ".join(f"{key}: {value}" for key, value in row.items())
        for row in rows[:limit]
    )


def render_for_oracle(content: SpreadsheetContent, filename: str) -> str:
    """Text view of a workbook for text classification."""
    header_text = ", ".join(h for h in content.headers if h)
    return (
        f"Excel File: {filename}\n"
        f"Sheets: {', '.join(content.sheet_names)}\n"
        f"Dimensions: {content.row_count} rows, {content.column_count} columns\n"
        f"\n"
        f"Headers: {header_text}\n"
        f"\n"
        f"Data Preview:\n"
        f"{render_rows(content.rows, PREVIEW_ROWS)}"
    )


def _row_to_dict(headers: list[str], row: list[Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for index, value in enumerate(row):
        if _is_empty(value):
            continue
        key = headers[index] if index < len(headers) and headers[index] else f"Column {index + 1}"
        result[key] = value
    return result


def _cell_text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
