from abc import ABC, abstractmethod


class BaseOcrEngine(ABC):
    """Contract for all OCR engine adapters."""

    @abstractmethod
    async def extract_text(self, image_bytes: bytes, mime_type: str) -> str:
        """Extract raw text from one image or rendered PDF page.

        Args:
            image_bytes: Encoded image content.
            mime_type: MIME type of image_bytes, e.g. "image/png".

        Returns:
            Extracted text; empty string for a page without text.

        Raises:
            OcrError: on any failure.
        """
