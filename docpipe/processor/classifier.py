"""Classifies one file end to end. Never raises: every failure becomes an 'other' result."""

import asyncio
from collections.abc import Awaitable, Callable
from enum import Enum

from docpipe.classification.base import BaseClassificationOracle
from docpipe.classification.models import OracleClassification
from docpipe.documents.document_types import OTHER
from docpipe.documents.exceptions import SpreadsheetReadError
from docpipe.documents.file_adapter import FileAdapter
from docpipe.documents.models import (
    ClassificationMethod,
    ClassificationResult,
    FileDescriptor,
    MediaKind,
    SpreadsheetInfo,
)
from docpipe.documents.spreadsheet import SpreadsheetContent, render_for_oracle, render_rows
from docpipe.logging.logger import Log
from docpipe.ocr.base import BaseOcrEngine
from docpipe.ocr.exceptions import OcrError
from docpipe.processor.spreadsheet_heuristics import SpreadsheetHeuristic, extract_customer_fields

OCR_FAILED_MARKER = "[OCR Failed]"
UNSUPPORTED_SUMMARY = "Unsupported file type - supports images, PDFs, and spreadsheets"

Sleep = Callable[[float], Awaitable[None]]


class SpreadsheetStrategy(str, Enum):
    HEURISTIC = "heuristic"
    AI = "ai"


def failure_summary(message: object) -> str:
    return f"Classification failed: {message}"


class SingleItemClassifier:
    """Media-kind dispatch, OCR, oracle call, and type-table resolution for one file."""

    def __init__(
        self,
        *,
        file_adapter: FileAdapter,
        ocr: BaseOcrEngine,
        oracle: BaseClassificationOracle,
        spreadsheet_strategy: SpreadsheetStrategy = SpreadsheetStrategy.HEURISTIC,
        spreadsheet_heuristic: SpreadsheetHeuristic | None = None,
        timeout_seconds: float = 30.0,
        page_delay_seconds: float = 0.0,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._file_adapter = file_adapter
        self._ocr = ocr
        self._oracle = oracle
        self._spreadsheet_strategy = SpreadsheetStrategy(spreadsheet_strategy)
        self._spreadsheet_heuristic = spreadsheet_heuristic or SpreadsheetHeuristic()
        self._timeout_seconds = timeout_seconds
        self._page_delay_seconds = page_delay_seconds
        self._sleep = sleep

    def requires_external_call(self, file: FileDescriptor) -> bool:
        """Whether classifying this file calls the OCR engine or the oracle."""
        if file.media_kind in (MediaKind.IMAGE, MediaKind.PDF):
            return True
        if file.media_kind is MediaKind.SPREADSHEET:
            return self._spreadsheet_strategy is SpreadsheetStrategy.AI
        return False

    async def classify(
        self, file: FileDescriptor, type_hint: str | None = None
    ) -> ClassificationResult:
        try:
            if file.media_kind is MediaKind.UNSUPPORTED:
                Log.info(f"Skipping unsupported file: {file.name}")
                return ClassificationResult.build(
                    document_type=OTHER, confidence=0, summary=UNSUPPORTED_SUMMARY
                )
            if not self.requires_external_call(file):
                return await asyncio.to_thread(self._classify_spreadsheet_locally, file)
            return await asyncio.wait_for(
                self._classify_external(file, type_hint),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            Log.warning(f"Classification of {file.name} timed out after {self._timeout_seconds}s")
            return ClassificationResult.fallback(
                failure_summary(f"timed out after {self._timeout_seconds}s")
            )
        except Exception as exc:
            Log.error(f"Classification of {file.name} failed: {exc}")
            return ClassificationResult.fallback(failure_summary(exc))

    async def _classify_external(
        self, file: FileDescriptor, type_hint: str | None
    ) -> ClassificationResult:
        if file.media_kind is MediaKind.IMAGE:
            text = await self._ocr.extract_text(file.data, file.mime_type)
            verdict = await self._oracle.classify(text, type_hint)
            return _to_result(verdict, text, ClassificationMethod.VISION_AI)
        if file.media_kind is MediaKind.PDF:
            return await self._classify_pdf(file, type_hint)
        return await self._classify_spreadsheet_with_oracle(file, type_hint)

    async def _classify_pdf(
        self, file: FileDescriptor, type_hint: str | None
    ) -> ClassificationResult:
        images = await asyncio.to_thread(self._file_adapter.to_ocr_images, file)
        sections: list[str] = []
        for index, image in enumerate(images):
            if index and self._page_delay_seconds:
                await self._sleep(self._page_delay_seconds)
            try:
                page_text = await self._ocr.extract_text(image.data, image.mime_type)
            except OcrError as exc:
                Log.warning(f"OCR failed for {file.name} page {index + 1}: {exc}")
                page_text = OCR_FAILED_MARKER
            sections.append(f"--- Page {index + 1} ---\n{page_text}")
        text = "\n\n".join(sections)
        Log.debug(f"{file.name}: OCR'd {len(images)} pages")

        verdict = await self._oracle.classify(text, type_hint)
        result = _to_result(verdict, text, ClassificationMethod.VISION_AI)
        if len(images) > 1:
            result = ClassificationResult.build(
                document_type=result.document_type,
                confidence=result.confidence,
                customer_name=result.customer_name,
                summary=f"{len(images)}-page PDF: {result.summary}",
                signed=result.signed,
                raw_text=result.raw_text,
                extracted_fields=result.extracted_fields,
                method=result.method,
            )
        return result

    async def _classify_spreadsheet_with_oracle(
        self, file: FileDescriptor, type_hint: str | None
    ) -> ClassificationResult:
        content = await asyncio.to_thread(self._file_adapter.spreadsheet_content, file)
        verdict = await self._oracle.classify(render_for_oracle(content, file.name), type_hint)
        fields = {**extract_customer_fields(content), **verdict.extracted_fields}
        return _to_result(
            verdict,
            render_rows(content.rows),
            ClassificationMethod.SPREADSHEET_AI,
            spreadsheet=content.info,
            extracted_fields=fields,
        )

    def _classify_spreadsheet_locally(self, file: FileDescriptor) -> ClassificationResult:
        content: SpreadsheetContent | None
        try:
            content = self._file_adapter.spreadsheet_content(file)
        except SpreadsheetReadError as exc:
            Log.warning(f"Could not read spreadsheet {file.name}: {exc}")
            content = None
        result = self._spreadsheet_heuristic.classify(file.name, content)
        Log.info(f"{file.name}: {result.document_type} ({result.confidence}%) from heuristics")
        return result


def _to_result(
    verdict: OracleClassification,
    raw_text: str,
    method: ClassificationMethod,
    spreadsheet: SpreadsheetInfo | None = None,
    extracted_fields: dict[str, object] | None = None,
) -> ClassificationResult:
    return ClassificationResult.build(
        document_type=verdict.document_type,
        confidence=verdict.confidence,
        customer_name=verdict.customer_name,
        summary=verdict.summary,
        signed=verdict.signed,
        raw_text=raw_text,
        extracted_fields=extracted_fields if extracted_fields is not None else verdict.extracted_fields,
        method=method,
        spreadsheet=spreadsheet,
    )
