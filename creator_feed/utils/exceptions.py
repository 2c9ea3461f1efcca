"""Custom exceptions for the application."""


class CreatorFeedError(Exception):
    """Base exception for creator feed errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class RepositoryError(CreatorFeedError):
    """Storage layer errors."""

    def __init__(
        self,
        message: str,
        source: str,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.source = source


class CacheError(CreatorFeedError):
    """Cache backend errors."""


class APIError(CreatorFeedError):
    """Errors raised by request dependencies and routes."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
