from __future__ import annotations

from typing import Any, BinaryIO, Callable, Dict, Mapping, Optional, Protocol

StatusCode = int
RequestId = str


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(
        self, code: str, message: str, *, meta: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = dict(meta or {})


# Caller-supplied hook applied to every classified error before it is raised.
ErrorTransform = Callable[[StatusCode, BaseException], BaseException]


# ---- Ports (Hexagonal boundaries) ----
class TransportResponse(Protocol):
    """What a transport hands back for one request.

    ``raw`` is the undecoded body stream; it stays unread until a consumer
    reads it and must be closed exactly once by whoever owns it.
    """

    status_code: int
    headers: Mapping[str, str]
    reason: Optional[str]
    raw: BinaryIO


class HttpTransport(Protocol):
    """Performs the network exchange for a prepared request.

    Failures (connection refused, DNS, timeout) are raised, never returned.
    """

    def do(self, request: Any) -> TransportResponse: ...
