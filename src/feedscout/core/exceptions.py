"""Exceptions raised by feedscout."""


class FeedscoutError(Exception):
    """Base class for feedscout errors."""


class MalformedUriError(FeedscoutError, ValueError):
    """Raised when a URI cannot be resolved into an absolute http(s) URL."""

    def __init__(self, uri: str, reason: str = "") -> None:
        self.uri = uri
        self.reason = reason
        message = f"Malformed URI: {uri!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
