"""Exceptions raised by the gist synchronization client."""

from __future__ import annotations

from .redact import redact_token


class GistSyncError(Exception):
    """Base class for all gist synchronization errors."""


class ValidationError(GistSyncError):
    """Raised when a required argument is blank.

    Raised before any request is made.
    """

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} is required")


class TransportError(GistSyncError):
    """Raised when the HTTP exchange itself fails (DNS, connection, timeout)."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class RemoteError(GistSyncError):
    """Raised when Gitee answers with a non-success status.

    Only the redacted form of the token is kept on the exception.
    """

    def __init__(self, method: str, status_code: int, token: str, body: str):
        self.method = method
        self.status_code = status_code
        self.token = redact_token(token)
        self.body = body
        super().__init__(
            f"Gitee {method} gist failed: status={status_code} "
            f"token={self.token} body={body}"
        )


class DecodeError(GistSyncError):
    """Raised when a successful response body is not valid JSON."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Failed to decode Gitee response: {detail}")
