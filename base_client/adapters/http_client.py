"""``requests``-backed transport for ``ResponseExecutor``.

This module provides a thin wrapper around ``requests.Session`` that satisfies
the ``HttpTransport`` port: it sends an already prepared request and returns
the response with its body still unread.

Dependencies:
    - ``requests`` for network I/O.

Call context:
    - Built by ``ResponseExecutor.from_config`` or by callers that want to
      share one session between several executors.
    - Transport exceptions (``requests.exceptions.*``) are not caught here;
      retry and backoff are the caller's business.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

import requests

from base_client.domain.ports import HttpTransport

_log = logging.getLogger(__name__)

DEFAULT_REQUEST_ID_HEADER = "X-Request-Id"


@dataclass
class HttpConfig:
    """Transport and classification settings.

    Attributes:
        request_timeout_s: Timeout in seconds handed to ``Session.send``.
        request_id_header: Response header carrying the server's request id.
        verify_tls: Whether to verify server certificates.
        api_key: Value for the ``X-API-Key`` request header, or ``None``.
    """

    request_timeout_s: float = 10
    request_id_header: str = DEFAULT_REQUEST_ID_HEADER
    verify_tls: bool = True
    api_key: Optional[str] = None


class PooledBody:
    """Response body whose ``close`` hands the connection back to the pool.

    Closing only the urllib3 stream leaves the connection checked out;
    ``requests.Response.close`` closes the stream and releases it.
    """

    def __init__(self, response: requests.Response) -> None:
        self.response = response

    def read(self, amt: Optional[int] = None) -> bytes:
        if amt is None or amt < 0:
            return self.response.raw.read()
        return self.response.raw.read(amt)

    def readable(self) -> bool:
        return True

    @property
    def closed(self) -> bool:
        return bool(self.response.raw.closed)

    def close(self) -> None:
        self.response.close()


@dataclass
class StreamedResponse:
    """``TransportResponse`` view of a streamed ``requests.Response``."""

    status_code: int
    headers: Mapping[str, str]
    reason: Optional[str]
    raw: PooledBody

    @classmethod
    def wrap(cls, response: requests.Response) -> "StreamedResponse":
        return cls(
            status_code=response.status_code,
            headers=response.headers,
            reason=response.reason,
            raw=PooledBody(response),
        )


class RequestsTransport(HttpTransport):
    """Send prepared requests through a shared ``requests.Session``.

    Responses are always streamed so the body reaches the executor unread.
    """

    def __init__(
        self,
        cfg: Optional[HttpConfig] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Create a transport.

        Args:
            cfg: Timeout and TLS settings; defaults to ``HttpConfig()``.
            session: Existing session to reuse. A new one is created otherwise.
        """
        self.cfg = cfg or HttpConfig()
        self.session = session if session is not None else requests.Session()

    def do(self, request: requests.PreparedRequest) -> StreamedResponse:
        """Send ``request`` and return the streamed response.

        Raises:
            requests.exceptions.RequestException: Any transport-level failure,
                unchanged.
        """
        if self.cfg.api_key and "X-API-Key" not in request.headers:
            request.headers["X-API-Key"] = self.cfg.api_key
        _log.debug("%s %s", request.method, request.url)
        resp = self.session.send(
            request,
            stream=True,
            timeout=self.cfg.request_timeout_s,
            verify=self.cfg.verify_tls,
        )
        # Undo gzip/deflate on read so consumers see the same bytes as resp.content.
        resp.raw.decode_content = True
        return StreamedResponse.wrap(resp)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = [
    "DEFAULT_REQUEST_ID_HEADER",
    "HttpConfig",
    "PooledBody",
    "RequestsTransport",
    "StreamedResponse",
]
