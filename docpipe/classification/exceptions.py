class ClassificationError(Exception):
    """Raised when classification fails."""


class ClassificationParseError(ClassificationError):
    """Raised when the oracle response is not a JSON object."""


class ClassificationNetworkError(ClassificationError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
