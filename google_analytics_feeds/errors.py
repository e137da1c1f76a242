"""Exceptions raised by google-analytics-feeds."""

from typing import Optional


class GoogleAnalyticsFeedsError(Exception):
    """Base class for all errors raised by this package."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class AuthenticationError(GoogleAnalyticsFeedsError):
    """Raised if loading the key or exchanging it for a token fails."""


class RetrievalError(GoogleAnalyticsFeedsError):
    """Raised if anything goes wrong while retrieving a report."""


class HttpError(RetrievalError):
    """Raised if the reporting API answers with an HTTP error status."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message, code=str(status) if status is not None else None)
        self.status = status


class DataIntegrityError(GoogleAnalyticsFeedsError):
    """Raised when a response row does not line up with its column headers."""
