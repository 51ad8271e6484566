"""Platform-specific exceptions."""


class PlatformError(Exception):
    """Base exception for platform errors."""


class ConnectionError(PlatformError):
    """Raised when the platform has no usable connection to the search engine."""


class DocumentNotFoundError(PlatformError):
    """Raised when a requested document does not exist."""


class ConfigurationError(PlatformError):
    """Raised when platform configuration is invalid."""


class AccessIsEmptyError(PlatformError):
    """Raised when a document carries no access information."""


class IndexResultError(PlatformError):
    """Raised when the engine acknowledges an index request with an unexpected result.

    The acknowledgement is kept in ``body`` so it can be reported as is.
    """

    def __init__(self, message: str, body: dict | None = None) -> None:
        super().__init__(message)
        self.body = body or {}


class UnparsableStructureError(PlatformError):
    """Raised when an engine error payload does not have the expected shape."""
