"""
Custom exception classes for the vector config loader.

These provide a hierarchy of typed exceptions so callers can branch on the
kind of failure instead of parsing messages.
"""

# HTTP statuses worth retrying by the caller; this package never retries itself
RETRYABLE_STATUSES = frozenset({408, 429, 500, 502, 503, 504})


class VectorConfigError(Exception):
    """Base exception for loader errors."""

    pass


class CatalogUnavailable(VectorConfigError):
    """Raised when the configuration catalog could not be constructed."""

    pass


class ConfigNotFound(VectorConfigError, LookupError):
    """Raised when a key is absent from an otherwise valid catalog."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Config for key '{key}' not found")
        self.key = key


class NetworkError(VectorConfigError):
    """
    Raised for transport failures and non-success HTTP responses.

    ``status`` is the HTTP status code, or None when no response was received
    (connection refused, DNS failure, timeout).
    """

    def __init__(self, message: str, *, url: str, status: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status

    @property
    def retryable(self) -> bool:
        """True when the failure looks transient rather than permanent."""
        return self.status is None or self.status in RETRYABLE_STATUSES


class ResourceNotFound(NetworkError):
    """Raised on a 404: the resource does not exist on the remote host."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Resource not found: {url}", url=url, status=404)
