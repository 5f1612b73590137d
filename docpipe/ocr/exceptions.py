class OcrError(Exception):
    """Raised when text extraction fails."""


class OcrNetworkError(OcrError):
    """Raised when the OCR provider call fails due to network/infrastructure issues."""
