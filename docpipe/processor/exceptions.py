class ProcessorError(Exception):
    """Base exception for pipeline processing errors."""


class SplitError(ProcessorError):
    """Raised when split groups violate the page partition contract."""
