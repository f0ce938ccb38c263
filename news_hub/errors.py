"""Exception types raised by the news hub."""

from __future__ import annotations


class NewsHubError(Exception):
    """Base class for news hub errors."""


class TransportError(NewsHubError):
    """A list or detail fetch failed.

    Raised for network failures, non-2xx responses and payloads that are not
    JSON or do not have the expected shape.

    Attributes:
        status_code: HTTP status code, or None if no response was received
        url: The URL that was requested
    """

    def __init__(self, message: str, status_code: int | None = None, url: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url
