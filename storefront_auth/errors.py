"""
Errors - Exception taxonomy for the session/auth core.

Transport failures (host unreachable, connection reset, ...) are NOT wrapped:
they propagate as httpx.TransportError so callers can tell them apart from
an ApiError, which always means the server answered.
"""

from typing import Any


class StorefrontAuthError(Exception):
    """Base class for all storefront_auth errors."""


class ApiError(StorefrontAuthError):
    """
    Server responded with a non-success status.

    Attributes:
        status: HTTP status code
        status_text: Reason phrase
        data: Parsed JSON body, or raw text when the body is not JSON
    """

    def __init__(self, status: int, status_text: str = "", data: Any = None):
        super().__init__("Request failed")
        self.status = status
        self.status_text = status_text
        self.data = data

    @property
    def message(self) -> str:
        """Server-provided message if the body carries one."""
        if isinstance(self.data, dict) and self.data.get("message"):
            return str(self.data["message"])
        return str(self)

    def __repr__(self) -> str:
        return f"ApiError(status={self.status}, status_text={self.status_text!r})"


class RequestCancelledError(StorefrontAuthError):
    """Request was abandoned through its cancellation signal."""


class StorageError(StorefrontAuthError):
    """Durable token storage failed (read, write or delete)."""


def describe_error(exc: BaseException, default: str) -> str:
    """
    Build the user-facing message for a failed operation.

    Prefers the server message, then the exception text, then the default.
    """
    if isinstance(exc, ApiError):
        return exc.message
    return str(exc) or default
