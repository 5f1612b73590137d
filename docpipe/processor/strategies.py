"""Ways of obtaining page texts and a page grouping for one multi-page PDF.

A strategy never raises for external failures; it returns StrategyFailure
so the analyzer can try the next one.
"""

import asyncio
import math
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from docpipe.classification.base import BaseClassificationOracle
from docpipe.classification.models import PageGroup, PageGrouping
from docpipe.documents.document_types import OTHER
from docpipe.documents.models import FileDescriptor
from docpipe.logging.logger import Log
from docpipe.ocr.base import BaseOcrEngine
from docpipe.ocr.exceptions import OcrError
from docpipe.pdf.base import BasePdfExtractor
from docpipe.pdf.exceptions import PdfExtractionError, PdfRenderError
from docpipe.pdf.renderer import RENDER_MIME_TYPE, PdfRenderer
from docpipe.processor.classifier import OCR_FAILED_MARKER

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class AnalysisDraft:
    total_pages: int
    page_texts: list[str]
    grouping: PageGrouping
    notes: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class StrategyFailure:
    reason: str


class AnalysisStrategy(ABC):
    name: str = ""

    @abstractmethod
    async def attempt(self, source: FileDescriptor) -> AnalysisDraft | StrategyFailure:
        """Analyze the source, or report why this strategy could not."""


def base64_size(byte_count: int) -> int:
    return 4 * math.ceil(byte_count / 3)


class DirectWholeDocumentStrategy(AnalysisStrategy):
    """One oracle call over the whole PDF."""

    name = "direct"

    def __init__(
        self,
        oracle: BaseClassificationOracle,
        renderer: PdfRenderer,
        max_payload_bytes: int = 20 * 1024 * 1024,
    ) -> None:
        self._oracle = oracle
        self._renderer = renderer
        self._max_payload_bytes = max_payload_bytes

    async def attempt(self, source: FileDescriptor) -> AnalysisDraft | StrategyFailure:
        payload = base64_size(source.size_bytes)
        if payload > self._max_payload_bytes:
            return StrategyFailure(
                f"payload too large ({payload} > {self._max_payload_bytes} bytes)"
            )
        try:
            analysis = await self._oracle.classify_whole_document(source.data, source.name)
        except Exception as exc:
            return StrategyFailure(f"whole-document classification failed: {exc}")

        notes: list[str] = []
        total_pages = analysis.total_pages
        try:
            actual = await asyncio.to_thread(self._renderer.page_count, source.data)
        except PdfRenderError as exc:
            notes.append(f"page count unavailable: {exc}")
        else:
            if actual != total_pages:
                notes.append(f"oracle reported {total_pages} pages, PDF has {actual}")
            total_pages = actual
        if total_pages < 1:
            return StrategyFailure("whole-document classification returned no pages")
        return AnalysisDraft(
            total_pages=total_pages,
            page_texts=_fit(analysis.page_texts, total_pages),
            grouping=analysis,
            notes=notes,
        )


class PageByPageStrategy(AnalysisStrategy):
    """OCR every page independently, then one grouping call over all page texts."""

    name = "page_by_page"

    def __init__(
        self,
        ocr: BaseOcrEngine,
        oracle: BaseClassificationOracle,
        renderer: PdfRenderer,
        text_extractor: BasePdfExtractor | None = None,
        page_delay_seconds: float = 0.0,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._ocr = ocr
        self._oracle = oracle
        self._renderer = renderer
        self._text_extractor = text_extractor
        self._page_delay_seconds = page_delay_seconds
        self._sleep = sleep

    async def attempt(self, source: FileDescriptor) -> AnalysisDraft | StrategyFailure:
        try:
            images = await asyncio.to_thread(self._renderer.render_pages, source.data)
        except PdfRenderError as exc:
            return StrategyFailure(f"page rendering failed: {exc}")
        if not images:
            return StrategyFailure("PDF has no pages")

        text_layer: list[str] | None = None
        page_texts: list[str] = []
        for index, image in enumerate(images):
            if index and self._page_delay_seconds:
                await self._sleep(self._page_delay_seconds)
            try:
                page_texts.append(await self._ocr.extract_text(image, RENDER_MIME_TYPE))
                continue
            except OcrError as exc:
                Log.warning(f"OCR failed for {source.name} page {index + 1}: {exc}")
            if text_layer is None:
                text_layer = await self._read_text_layer(source)
            fallback = text_layer[index] if index < len(text_layer) else ""
            page_texts.append(fallback.strip() or OCR_FAILED_MARKER)

        total_pages = len(images)
        try:
            grouping = await self._oracle.classify_batch_text(page_texts)
        except Exception as exc:
            Log.error(f"Page grouping failed for {source.name}: {exc}")
            grouping = PageGrouping(
                page_groups=[PageGroup(OTHER, list(range(1, total_pages + 1)), 0)]
            )
            return AnalysisDraft(
                total_pages, page_texts, grouping, notes=[f"grouping failed: {exc}"]
            )
        return AnalysisDraft(total_pages, page_texts, grouping)

    async def _read_text_layer(self, source: FileDescriptor) -> list[str]:
        if self._text_extractor is None:
            return []
        try:
            return await asyncio.to_thread(self._text_extractor.extract_pages, source.data)
        except PdfExtractionError as exc:
            Log.warning(f"No text layer for {source.name}: {exc}")
            return []


def _fit(texts: list[str], total_pages: int) -> list[str]:
    return (texts + [""] * total_pages)[:total_pages]
