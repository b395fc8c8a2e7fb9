"""Classified HTTP error types raised for status codes >= 400.

These errors are what ``ResponseExecutor`` builds before handing them to the
caller's error transform. Decode and transport failures never derive from
``ResponseError`` so callers can tell them apart with a plain ``except``.
"""

from __future__ import annotations

from typing import Any, Optional


class ResponseError(RuntimeError):
    """Base class for non-success HTTP responses."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        request_id: str = "",
        code: Optional[str] = None,
        hint: Optional[str] = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.request_id = request_id or ""
        self.message = message
        self.code = code
        self.hint = hint
        self.payload = payload

    def __str__(self) -> str:
        if self.request_id:
            return f"{self.message} (HTTP {self.status}, request {self.request_id})"
        return f"{self.message} (HTTP {self.status})"


class ClientError(ResponseError):
    """HTTP 4xx: the server rejected the request."""


class ServerError(ResponseError):
    """HTTP 5xx: the server failed to handle the request."""


__all__ = ["ClientError", "ResponseError", "ServerError"]
