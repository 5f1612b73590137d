from collections.abc import Callable

import pytest

from docpipe.documents.exceptions import SpreadsheetReadError
from docpipe.documents.spreadsheet import read_spreadsheet, render_for_oracle, render_rows

XlsxFactory = Callable[[list[str], list[list[object]]], bytes]


class TestReadSpreadsheet:
    def test_reads_headers_and_rows(self, customer_xlsx_bytes: bytes) -> None:
        content = read_spreadsheet(customer_xlsx_bytes)
        assert content.sheet_names == ["Customers"]
        assert content.headers == ["Name", "NRIC", "Phone", "Email"]
        assert content.rows[0]["Name"] == "Tan Ah Kow"
        assert content.row_count == 2
        assert content.column_count == 4

    def test_empty_cells_are_omitted_from_rows(self, xlsx_factory: XlsxFactory) -> None:
        content = read_spreadsheet(xlsx_factory(["Name", "Phone"], [["Lim", None]]))
        assert content.rows == [{"Name": "Lim"}]

    def test_unnamed_columns_get_positional_keys(self, xlsx_factory: XlsxFactory) -> None:
        content = read_spreadsheet(xlsx_factory(["Name", ""], [["Lim", "x"]]))
        assert content.rows[0]["Column 2"] == "x"

    def test_info_drops_blank_headers(self, xlsx_factory: XlsxFactory) -> None:
        content = read_spreadsheet(xlsx_factory(["Name", ""], [["Lim", "x"]]))
        assert content.info.headers == ["Name"]

    def test_invalid_bytes_raise(self) -> None:
        with pytest.raises(SpreadsheetReadError):
            read_spreadsheet(b"not a workbook")


class TestRendering:
    def test_render_rows_respects_limit(self) -> None:
        rows = [{"n": i} for i in range(5)]
        assert render_rows(rows, limit=2) == "n: 0\nn: 1"

    def test_render_for_oracle_includes_layout(self, customer_xlsx_bytes: bytes) -> None:
        text = render_for_oracle(read_spreadsheet(customer_xlsx_bytes), "leads.xlsx")
        assert text.startswith("Excel File: leads.xlsx\nSheets: Customers\n")
        assert "Dimensions: 2 rows, 4 columns" in text
        assert "Headers: Name, NRIC, Phone, Email" in text
        assert "Name: Tan Ah Kow | NRIC: S1234567A" in text
