class FileAdapterError(Exception):
    """Raised when an input file cannot be converted into an OCR/oracle payload."""


class SpreadsheetReadError(FileAdapterError):
    """Raised when a spreadsheet cannot be parsed."""
