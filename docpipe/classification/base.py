from abc import ABC, abstractmethod

from docpipe.classification.models import (
    OracleClassification,
    PageGrouping,
    WholeDocumentAnalysis,
)


class BaseClassificationOracle(ABC):
    """Contract for all classification oracles."""

    @abstractmethod
    async def classify(self, raw_text: str, type_hint: str | None = None) -> OracleClassification:
        """Classify one document's extracted text.

        Raises:
            ClassificationError: on any failure, including unparseable responses.
        """

    @abstractmethod
    async def classify_batch_text(self, page_texts: list[str]) -> PageGrouping:
        """Assign a type to each page and group pages into documents in one call."""

    @abstractmethod
    async def classify_whole_document(
        self, document_bytes: bytes, filename: str = "document.pdf"
    ) -> WholeDocumentAnalysis:
        """Analyze an entire PDF in one call, returning page texts and grouping."""
