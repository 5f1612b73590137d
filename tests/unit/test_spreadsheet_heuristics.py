from collections.abc import Callable

import pytest

from docpipe.documents.models import ClassificationMethod
from docpipe.documents.spreadsheet import read_spreadsheet
from docpipe.processor.spreadsheet_heuristics import (
    FilenameHeuristic,
    SpreadsheetHeuristic,
    classify_headers,
    extract_customer_fields,
    filename_tokens,
)

XlsxFactory = Callable[[list[str], list[list[object]]], bytes]


class TestFilenameHeuristic:
    def test_tokenizes_stem(self) -> None:
        assert filename_tokens("Loan-Application_v2.xlsx") == ["loan", "application", "v2"]

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("Loan Application.xlsx", ("loan_application", 85)),
            ("loan_approval_final.xlsx", ("loan_approval", 85)),
            ("TEST-DRIVE.xlsx", ("test_drive_form", 85)),
            ("vsa_signed.xlsx", ("vsa", 80)),
            ("insurance.xlsx", ("insurance_quote", 75)),
        ],
    )
    def test_matches_keywords(self, filename: str, expected: tuple[str, int]) -> None:
        assert FilenameHeuristic().match(filename) == expected

    def test_matches_whole_tokens_only(self) -> None:
        assert FilenameHeuristic().match("canvsasser.xlsx") is None

    def test_no_match_returns_none(self) -> None:
        assert FilenameHeuristic().match("report.xlsx") is None

    def test_is_deterministic(self) -> None:
        heuristic = FilenameHeuristic()
        first = heuristic.match("Insurance Quote 2024.xlsx")
        assert all(heuristic.match("Insurance Quote 2024.xlsx") == first for _ in range(5))

    def test_injected_rules_replace_defaults(self) -> None:
        heuristic = FilenameHeuristic(rules=[(("c",), "loan_application", 80)])
        assert heuristic.match("c.xlsx") == ("loan_application", 80)
        assert heuristic.match("vsa.xlsx") is None


class TestClassifyHeaders:
    def test_insurance_headers(self) -> None:
        assert classify_headers(["Policy No", "Premium"]) == ("insurance_quote", 70)

    def test_vehicle_and_financial_headers(self) -> None:
        assert classify_headers(["Vehicle Model", "Selling Price"]) == ("vsa", 65)

    def test_customer_headers(self) -> None:
        assert classify_headers(["Name", "NRIC", "Phone"]) == ("id_documents", 60)

    def test_unrecognized_headers(self) -> None:
        assert classify_headers(["Foo", "Bar"]) == ("other", 50)


class TestSpreadsheetHeuristic:
    def test_extracts_customer_fields(self, customer_xlsx_bytes: bytes) -> None:
        fields = extract_customer_fields(read_spreadsheet(customer_xlsx_bytes))
        assert fields == {
            "name": "Tan Ah Kow",
            "nric": "S1234567A",
            "phone": "91234567",
            "email": "tan@example.com",
        }

    def test_filename_match_wins(self, customer_xlsx_bytes: bytes) -> None:
        content = read_spreadsheet(customer_xlsx_bytes)
        result = SpreadsheetHeuristic().classify("loan application.xlsx", content)
        assert result.document_type == "loan_application"
        assert result.confidence == 85
        assert result.customer_name == "Tan Ah Kow"
        assert result.method is ClassificationMethod.SPREADSHEET_HEURISTIC
        assert result.spreadsheet is not None
        assert result.spreadsheet.row_count == 2

    def test_headers_used_without_filename_match(self, xlsx_factory: XlsxFactory) -> None:
        content = read_spreadsheet(xlsx_factory(["Insurer", "Premium"], [["AIG", 1200]]))
        result = SpreadsheetHeuristic().classify("data.xlsx", content)
        assert (result.document_type, result.confidence) == ("insurance_quote", 70)
        assert "Premium: 1200" in result.raw_text

    def test_unreadable_without_filename_match_is_other(self) -> None:
        result = SpreadsheetHeuristic().classify("data.xlsx", None)
        assert (result.document_type, result.confidence) == ("other", 0)
        assert result.spreadsheet is None
