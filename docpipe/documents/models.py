import math
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import PurePath
from typing import Any

from docpipe.documents.document_types import OTHER, resolve_document_type

IMAGE_EXTENSIONS = frozenset(
    {".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp", ".tif", ".tiff", ".heic"}
)
PDF_EXTENSIONS = frozenset({".pdf"})
SPREADSHEET_EXTENSIONS = frozenset({".xlsx", ".xlsm", ".xls", ".ods"})
SPREADSHEET_MIME_TYPES = frozenset(
    {
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "application/vnd.ms-excel",
        "application/vnd.ms-excel.sheet.macroenabled.12",
        "application/vnd.oasis.opendocument.spreadsheet",
    }
)

_EXTENSION_MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
    ".heic": "image/heic",
    ".pdf": "application/pdf",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".xlsm": "application/vnd.ms-excel.sheet.macroenabled.12",
    ".xls": "application/vnd.ms-excel",
    ".ods": "application/vnd.oasis.opendocument.spreadsheet",
}


class MediaKind(str, Enum):
    IMAGE = "image"
    PDF = "pdf"
    SPREADSHEET = "spreadsheet"
    UNSUPPORTED = "unsupported"

    @classmethod
    def detect(cls, name: str, mime_type: str | None = None) -> "MediaKind":
        """Detect kind from declared MIME type first, then file extension.

        Office lock files ("~$report.xlsx") are never treated as spreadsheets.
        """
        base_name = PurePath(name).name
        if base_name.startswith("~$"):
            return cls.UNSUPPORTED
        mime = (mime_type or "").lower()
        if mime.startswith("image/"):
            return cls.IMAGE
        if mime == "application/pdf":
            return cls.PDF
        if mime in SPREADSHEET_MIME_TYPES:
            return cls.SPREADSHEET
        extension = PurePath(base_name).suffix.lower()
        if extension in IMAGE_EXTENSIONS:
            return cls.IMAGE
        if extension in PDF_EXTENSIONS:
            return cls.PDF
        if extension in SPREADSHEET_EXTENSIONS:
            return cls.SPREADSHEET
        return cls.UNSUPPORTED


def guess_mime_type(name: str) -> str:
    return _EXTENSION_MIME_TYPES.get(PurePath(name).suffix.lower(), "application/octet-stream")


@dataclass(frozen=True)
class FileDescriptor:
    """One input file: identity, payload, and declared media kind."""

    name: str
    data: bytes = field(repr=False)
    media_kind: MediaKind
    mime_type: str

    @classmethod
    def from_bytes(
        cls,
        name: str,
        data: bytes,
        mime_type: str | None = None,
    ) -> "FileDescriptor":
        if not name:
            raise ValueError("FileDescriptor.name must be non-empty")
        kind = MediaKind.detect(name, mime_type)
        return cls(
            name=name,
            data=data,
            media_kind=kind,
            mime_type=mime_type or guess_mime_type(name),
        )

    @property
    def extension(self) -> str:
        return PurePath(self.name).suffix.lower()

    @property
    def size_bytes(self) -> int:
        return len(self.data)


class ClassificationMethod(str, Enum):
    VISION_AI = "vision_ai"
    SPREADSHEET_AI = "spreadsheet_ai"
    SPREADSHEET_HEURISTIC = "spreadsheet_heuristic"
    NONE = "none"


@dataclass(frozen=True)
class SpreadsheetInfo:
    sheet_names: list[str]
    row_count: int
    column_count: int
    headers: list[str] = field(default_factory=list)


def clamp_confidence(value: Any, default: int = 0) -> int:
    """Coerce value to an int in [0, 100]; non-numeric values yield default.

    Fractions strictly between 0 and 1 are read as probabilities (0.7 -> 70).
    """
    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number):
        return default
    if 0 < number < 1:
        number *= 100
    return int(round(max(0.0, min(100.0, number))))


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of classifying one file. Never mutated; re-classify to replace."""

    document_type: str
    document_type_name: str
    confidence: int
    folder: str
    milestone: str
    customer_name: str = ""
    summary: str = ""
    signed: bool = False
    raw_text: str = ""
    extracted_fields: dict[str, Any] = field(default_factory=dict)
    method: ClassificationMethod = ClassificationMethod.NONE
    spreadsheet: SpreadsheetInfo | None = None

    @classmethod
    def build(
        cls,
        *,
        document_type: str | None,
        confidence: Any,
        customer_name: str = "",
        summary: str = "",
        signed: bool = False,
        raw_text: str = "",
        extracted_fields: dict[str, Any] | None = None,
        method: ClassificationMethod = ClassificationMethod.NONE,
        spreadsheet: SpreadsheetInfo | None = None,
    ) -> "ClassificationResult":
        """Build a result, resolving folder/milestone from the type table."""
        info = resolve_document_type(document_type)
        return cls(
            document_type=info.id,
            document_type_name=info.name,
            confidence=clamp_confidence(confidence),
            folder=info.folder,
            milestone=info.milestone,
            customer_name=customer_name,
            summary=summary,
            signed=signed,
            raw_text=raw_text,
            extracted_fields=dict(extracted_fields or {}),
            method=method,
            spreadsheet=spreadsheet,
        )

    @classmethod
    def fallback(cls, summary: str) -> "ClassificationResult":
        """The degraded 'other' result used for every failure path."""
        return cls.build(document_type=OTHER, confidence=0, summary=summary)

    @property
    def needs_review(self) -> bool:
        return self.confidence == 0 or self.document_type == OTHER


@dataclass(frozen=True)
class PageClassification:
    page_number: int
    document_type: str
    document_type_name: str
    confidence: int
    thumbnail: str = field(default="", repr=False)
    raw_text: str = field(default="", repr=False)


@dataclass
class SplitDocument:
    """A group of source pages destined to become one output PDF."""

    id: str
    document_type: str
    document_type_name: str
    pages: list[int]
    confidence: int
    thumbnail: str = field(default="", repr=False)
    output: bytes | None = field(default=None, repr=False)

    @classmethod
    def create(
        cls,
        id: str,
        document_type: str | None,
        pages: list[int],
        confidence: Any,
        thumbnail: str = "",
    ) -> "SplitDocument":
        info = resolve_document_type(document_type)
        return cls(
            id=id,
            document_type=info.id,
            document_type_name=info.name,
            pages=list(pages),
            confidence=clamp_confidence(confidence),
            thumbnail=thumbnail,
        )

    def with_output(self, pages: list[int], output: bytes) -> "SplitDocument":
        return replace(self, pages=list(pages), output=output)


@dataclass(frozen=True)
class BatchProgress:
    """Progress event emitted once per completed batch item."""

    completed: int
    total: int
    filename: str
    index: int
    result: ClassificationResult | None = None


@dataclass
class AnalysisResult:
    """Output of one multi-page analysis run."""

    total_pages: int
    page_classifications: list[PageClassification] = field(default_factory=list)
    suggested_splits: list[SplitDocument] = field(default_factory=list)
    customer_name: str = ""
    strategy: str = ""
    failures: list[str] = field(default_factory=list)

    @property
    def page_texts(self) -> list[str]:
        return [page.raw_text for page in self.page_classifications]

    @property
    def ungrouped_pages(self) -> list[int]:
        """Pages no group claimed; these need manual review."""
        grouped = {page for split in self.suggested_splits for page in split.pages}
        return [p for p in range(1, self.total_pages + 1) if p not in grouped]
