from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from requests.structures import CaseInsensitiveDict

from base_client.domain.ports import HttpTransport


class FakeResponse:
    """In-memory ``TransportResponse`` with a fresh ``BytesIO`` body."""

    def __init__(
        self,
        status_code: int,
        body: Union[bytes, str] = b"",
        *,
        headers: Optional[Mapping[str, str]] = None,
        reason: Optional[str] = None,
    ) -> None:
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.status_code = status_code
        self.headers = CaseInsensitiveDict(headers or {})
        self.reason = reason
        self.raw = io.BytesIO(body)


Outcome = Union[FakeResponse, BaseException, Callable[[Any], FakeResponse]]


@dataclass
class FakeTransport(HttpTransport):
    """Offline substitute for ``RequestsTransport`` with scripted outcomes.

    Each ``do`` call consumes the next outcome: a ``FakeResponse`` is returned,
    an exception is raised, a callable is invoked with the request. The last
    outcome repeats once the script is exhausted. A repeated ``FakeResponse``
    shares its already-read body, so use a callable for fresh bodies.
    """

    outcomes: Sequence[Outcome] = ()
    requests: List[Any] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.outcomes:
            raise ValueError("FakeTransport requires at least one outcome")
        self._script = list(self.outcomes)
        self._idx = 0

    def do(self, request: Any) -> FakeResponse:
        self.requests.append(request)
        outcome = self._script[min(self._idx, len(self._script) - 1)]
        self._idx += 1
        if isinstance(outcome, BaseException):
            raise outcome
        if callable(outcome) and not isinstance(outcome, FakeResponse):
            return outcome(request)
        return outcome


__all__ = ["FakeResponse", "FakeTransport"]
