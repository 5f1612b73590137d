class PdfExtractionError(Exception):
    """Raised when text cannot be extracted from a PDF."""


class PdfRenderError(Exception):
    """Raised when PDF pages cannot be rendered, counted, or copied."""
