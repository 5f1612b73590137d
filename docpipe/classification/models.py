from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class OracleClassification:
    """Validated single-text classification from the oracle."""

    document_type: str
    confidence: int
    customer_name: str = ""
    signed: bool = False
    summary: str = ""
    extracted_fields: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PageType:
    document_type: str
    confidence: int


@dataclass(frozen=True)
class PageGroup:
    document_type: str
    pages: list[int]
    confidence: int


@dataclass(frozen=True)
class PageGrouping:
    """Per-page types plus page-range grouping for one multi-page source."""

    customer_name: str = ""
    page_types: list[PageType] = field(default_factory=list)
    page_groups: list[PageGroup] = field(default_factory=list)


@dataclass(frozen=True)
class WholeDocumentAnalysis(PageGrouping):
    total_pages: int = 0
    page_texts: list[str] = field(default_factory=list)
