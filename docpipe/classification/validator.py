"""Turns parsed oracle JSON into validated models, defaulting what is missing.

Oracle output is advisory: missing fields take defaults, unknown document
types become "other", and confidences are coerced into [0, 100]. Only a
response that is not a JSON object at all is rejected (see the oracle).
"""

from typing import Any

from docpipe.classification.models import (
    OracleClassification,
    PageGroup,
    PageGrouping,
    PageType,
    WholeDocumentAnalysis,
)
from docpipe.documents.models import clamp_confidence
from docpipe.documents.document_types import resolve_document_type

DEFAULT_CONFIDENCE = 50


def build_classification(data: dict[str, Any]) -> OracleClassification:
    extracted = _build_extracted_fields(data.get("extractedFields"))
    customer_name = _text(data.get("customerName")) or _text(extracted.get("name"))
    return OracleClassification(
        document_type=_document_type(data.get("documentType")),
        confidence=_confidence(data.get("confidence")),
        customer_name=customer_name,
        signed=data.get("signed") is True,
        summary=_text(data.get("summary")),
        extracted_fields=extracted,
    )


def build_page_grouping(data: dict[str, Any]) -> PageGrouping:
    return PageGrouping(
        customer_name=_text(data.get("customerName")),
        page_types=_build_page_types(data.get("pages")),
        page_groups=_build_page_groups(data.get("documentGroups")),
    )


def build_whole_document(data: dict[str, Any]) -> WholeDocumentAnalysis:
    raw_texts = data.get("pageTexts")
    page_texts = [_text(t) for t in raw_texts] if isinstance(raw_texts, list) else []
    total_pages = data.get("totalPages")
    if isinstance(total_pages, bool) or not isinstance(total_pages, int) or total_pages < 1:
        total_pages = len(page_texts)
    grouping = build_page_grouping(data)
    return WholeDocumentAnalysis(
        customer_name=grouping.customer_name,
        page_types=grouping.page_types,
        page_groups=grouping.page_groups,
        total_pages=total_pages,
        page_texts=page_texts,
    )


def _build_page_types(raw: Any) -> list[PageType]:
    if not isinstance(raw, list):
        return []
    page_types: list[PageType] = []
    for item in raw:
        if not isinstance(item, dict):
            item = {}
        page_types.append(
            PageType(
                document_type=_document_type(item.get("documentType")),
                confidence=_confidence(item.get("confidence")),
            )
        )
    return page_types


def _build_page_groups(raw: Any) -> list[PageGroup]:
    if not isinstance(raw, list):
        return []
    groups: list[PageGroup] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        groups.append(
            PageGroup(
                document_type=_document_type(item.get("documentType")),
                pages=_page_numbers(item.get("pages")),
                confidence=_confidence(item.get("confidence")),
            )
        )
    return groups


def _page_numbers(raw: Any) -> list[int]:
    if not isinstance(raw, list):
        return []
    pages: list[int] = []
    for value in raw:
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            pages.append(value)
        elif isinstance(value, str) and value.strip().isdigit():
            pages.append(int(value.strip()))
    return pages


def _build_extracted_fields(raw: Any) -> dict[str, Any]:
    if not isinstance(raw, dict):
        return {}
    return {str(key): value for key, value in raw.items() if value not in (None, "")}


def _document_type(raw: Any) -> str:
    return resolve_document_type(raw if isinstance(raw, str) else None).id


def _confidence(raw: Any) -> int:
    if raw is None:
        return DEFAULT_CONFIDENCE
    return clamp_confidence(raw, default=DEFAULT_CONFIDENCE)


def _text(raw: Any) -> str:
    return raw.strip() if isinstance(raw, str) else ""
