"""Local spreadsheet classification: filename keywords first, then header keywords.

Pure functions of their inputs; no external calls.
"""

import re
from collections.abc import Sequence
from pathlib import PurePath
from typing import Any

from docpipe.documents.document_types import OTHER, resolve_document_type
from docpipe.documents.models import ClassificationMethod, ClassificationResult
from docpipe.documents.spreadsheet import SpreadsheetContent, render_rows

FilenameRule = tuple[tuple[str, ...], str, int]

# Longer phrases first; the first matching rule wins.
DEFAULT_FILENAME_RULES: tuple[FilenameRule, ...] = (
    (("loan", "application"), "loan_application", 85),
    (("loan", "approval"), "loan_approval", 85),
    (("insurance", "proposal"), "insurance_policy", 85),
    (("insurance", "delivery"), "insurance_policy", 85),
    (("insurance", "quote"), "insurance_quote", 85),
    (("delivery", "checklist"), "delivery_checklist", 85),
    (("test", "drive"), "test_drive_form", 85),
    (("driving", "license"), "driving_license", 85),
    (("driving", "licence"), "driving_license", 85),
    (("performa", "invoice"), "payment_proof", 80),
    (("price", "list"), "price_list", 80),
    (("id", "front"), "nric_front", 80),
    (("id", "back"), "nric_back", 80),
    (("vsa",), "vsa", 80),
    (("nric",), "nric", 80),
    (("pdpa",), "pdpa", 80),
    (("coe",), "coe_bidding", 75),
    (("insurance",), "insurance_quote", 75),
    (("license",), "driving_license", 75),
    (("licence",), "driving_license", 75),
    (("finance",), "loan_approval", 70),
    (("loan",), "loan_approval", 70),
    (("delivery",), "delivery_checklist", 70),
    (("performa",), "payment_proof", 70),
    (("invoice",), "payment_proof", 70),
    (("declaration",), "insurance_cancellation", 70),
)

CUSTOMER_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("name", "customer name", "full name", "customer", "buyer", "buyer name"),
    "nric": ("nric", "ic", "nric/fin", "nric no", "ic number", "id number"),
    "phone": ("phone", "mobile", "contact", "contact number", "hp", "phone number"),
    "email": ("email", "e-mail", "email address"),
    "address": ("address", "home address", "mailing address"),
    "vehicleModel": ("vehicle model", "model", "car model", "vehicle"),
    "sellingPrice": ("selling price", "price", "vehicle price"),
}

_INSURANCE_WORDS = ("insurance", "premium", "policy")
_VEHICLE_WORDS = ("vehicle", "model", "car", "chassis")
_FINANCIAL_WORDS = ("price", "loan", "finance", "deposit", "coe", "downpayment")

_TOKEN_SPLIT = re.compile(r"[^a-z0-9]+")


def filename_tokens(filename: str) -> list[str]:
    """'Loan-Application_v2.xlsx' -> ['loan', 'application', 'v2']"""
    stem = PurePath(filename).stem.lower()
    return [token for token in _TOKEN_SPLIT.split(stem) if token]


class FilenameHeuristic:
    """Matches filename tokens against keyword-phrase rules."""

    def __init__(self, rules: Sequence[FilenameRule] = DEFAULT_FILENAME_RULES) -> None:
        self._rules = tuple(rules)

    def match(self, filename: str) -> tuple[str, int] | None:
        tokens = filename_tokens(filename)
        for phrase, document_type, confidence in self._rules:
            if _contains_phrase(tokens, phrase):
                return document_type, confidence
        return None


def classify_headers(headers: Sequence[str]) -> tuple[str, int]:
    header_text = " ".join(h.lower() for h in headers if h)
    if any(word in header_text for word in _INSURANCE_WORDS):
        return "insurance_quote", 70
    if any(word in header_text for word in _VEHICLE_WORDS) and any(
        word in header_text for word in _FINANCIAL_WORDS
    ):
        return "vsa", 65
    if len(_customer_columns(headers)) >= 2:
        return "id_documents", 60
    return OTHER, 50


def extract_customer_fields(content: SpreadsheetContent) -> dict[str, Any]:
    """Customer fields from the first data row, keyed by canonical field name."""
    if not content.rows:
        return {}
    first_row = content.rows[0]
    fields: dict[str, Any] = {}
    for field_name, header in _customer_columns(content.headers).items():
        value = first_row.get(header)
        if value is not None:
            fields[field_name] = value
    return fields


class SpreadsheetHeuristic:
    """Classifies a spreadsheet without any external call."""

    def __init__(self, filename_heuristic: FilenameHeuristic | None = None) -> None:
        self._filename_heuristic = filename_heuristic or FilenameHeuristic()

    def classify(self, filename: str, content: SpreadsheetContent | None) -> ClassificationResult:
        fields = extract_customer_fields(content) if content is not None else {}
        matched = self._filename_heuristic.match(filename)
        if matched is not None:
            document_type, confidence = matched
            reason = "filename"
        elif content is not None:
            document_type, confidence = classify_headers(content.headers)
            reason = "column headers"
        else:
            document_type, confidence = OTHER, 0
            reason = "nothing readable"
        type_name = resolve_document_type(document_type).name
        return ClassificationResult.build(
            document_type=document_type,
            confidence=confidence,
            customer_name=str(fields.get("name", "")),
            summary=f"Spreadsheet classified as {type_name} from {reason}",
            raw_text=render_rows(content.rows) if content is not None else "",
            extracted_fields=fields,
            method=ClassificationMethod.SPREADSHEET_HEURISTIC,
            spreadsheet=content.info if content is not None else None,
        )


def _contains_phrase(tokens: list[str], phrase: tuple[str, ...]) -> bool:
    width = len(phrase)
    return any(
        tuple(tokens[i : i + width]) == phrase for i in range(len(tokens) - width + 1)
    )


def _customer_columns(headers: Sequence[str]) -> dict[str, str]:
    """canonical field -> original header, first matching column wins."""
    columns: dict[str, str] = {}
    for header in headers:
        normalized = " ".join(header.lower().replace("_", " ").split())
        for field_name, aliases in CUSTOMER_FIELD_ALIASES.items():
            if field_name not in columns and normalized in aliases:
                columns[field_name] = header
                break
    return columns
