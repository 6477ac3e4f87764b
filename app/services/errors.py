"""Remote employee API exceptions."""

from __future__ import annotations


class EmployeeApiError(Exception):
    """Base exception for remote employee API calls."""

    def __init__(self, message: str, operation: str | None = None):
        self.operation = operation
        super().__init__(message)


class NotFoundError(EmployeeApiError):
    """Remote API answered 404."""


class RateLimitedError(EmployeeApiError):
    """Remote API answered 429."""

    def __init__(self, operation: str | None = None, retry_after: float | None = None):
        self.retry_after = retry_after
        msg = f"Rate limited by employee API on {operation or 'request'}"
        if retry_after:
            msg += f", retry after {retry_after}s"
        super().__init__(msg, operation=operation)


class RemoteFailureError(EmployeeApiError):
    """Remote API failed in a way retries cannot fix."""

    def __init__(self, message: str, operation: str | None = None, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message, operation=operation)


class TransportError(RemoteFailureError):
    """Network error or timeout talking to the remote API."""


class NotInitializedError(RemoteFailureError):
    """Client was used before ``initialize`` configured a base URL."""
