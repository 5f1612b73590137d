"""Example OCR adapter.

Use this module as a reference when implementing new OCR providers.
Implement BaseOcrEngine and register the provider in OcrEngineFactory.
"""

from docpipe.ocr.base import BaseOcrEngine


class ExampleOcrAdapter(BaseOcrEngine):
    """Returns fixed text for every image. No network calls."""

    DEFAULT_TEXT = (
        "VEHICLE SALES AGREEMENT\n"
        "Buyer: TAN AH KOW  NRIC: S1234567A\n"
        "Model: BYD ATTO 3  Selling Price: $150,000"
    )

    def __init__(self, text: str | None = None) -> None:
        self._text = self.DEFAULT_TEXT if text is None else text

    async def extract_text(self, image_bytes: bytes, mime_type: str) -> str:
        _ = image_bytes, mime_type
        return self._text
