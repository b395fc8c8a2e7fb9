"""Execute prepared requests and interpret their responses.

``ResponseExecutor`` sits on top of any ``HttpTransport``. It hands back the
unread body stream for status codes below 400 and raises a classified
``ClientError``/``ServerError`` (passed through the caller's error transform)
for everything else. The ``execute_*`` helpers decode the stream as JSON, as
text, or discard it, closing it on every path.

Dependencies:
    - ``pydantic`` for validating decoded JSON into caller models.
    - ``base_client.adapters.api_errors`` for structured error details.

Call context:
    - Used directly by API client code; ``base_client.usecases.error_mapping``
      provides an error transform for use-case facing callers.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from http import HTTPStatus
from typing import Any, BinaryIO, Iterator, Optional

from pydantic import TypeAdapter

from base_client.adapters.api_errors import (
    extract_error_code,
    extract_error_hint,
    parse_error_payload,
)
from base_client.adapters.http_client import HttpConfig, RequestsTransport
from base_client.domain.errors import ClientError, ResponseError, ServerError
from base_client.domain.ports import ErrorTransform, HttpTransport, TransportResponse

_log = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024
_JSON_DECODER = json.JSONDecoder()


def _identity(status: int, exc: BaseException) -> BaseException:
    return exc


class ResponseExecutor:
    """Run requests through a transport and classify failed responses.

    Instances only hold configuration set in ``__init__`` and may be shared
    between threads.
    """

    def __init__(
        self,
        transport: HttpTransport,
        *,
        error_transform: Optional[ErrorTransform] = None,
        request_id_header: str = "",
    ) -> None:
        """Create an executor.

        Args:
            transport: Capability that performs the network exchange.
            error_transform: Hook applied to every classified error before it
                is raised. Defaults to raising the classified error itself.
            request_id_header: Response header holding the server request id.
                An empty name disables the lookup.
        """
        self.transport = transport
        self.error_transform: ErrorTransform = error_transform or _identity
        self.request_id_header = request_id_header or ""

    @classmethod
    def from_config(
        cls,
        cfg: Optional[HttpConfig] = None,
        *,
        session: Any = None,
        error_transform: Optional[ErrorTransform] = None,
    ) -> "ResponseExecutor":
        """Build an executor backed by ``RequestsTransport``."""
        cfg = cfg or HttpConfig()
        return cls(
            RequestsTransport(cfg, session=session),
            error_transform=error_transform,
            request_id_header=cfg.request_id_header,
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def execute(self, request: Any) -> BinaryIO:
        """Send ``request`` and return the open response body.

        The caller owns the returned stream and must close it.

        Raises:
            Exception: Whatever the transport raised, unchanged.
            BaseException: The error transform's result for status >= 400.
        """
        resp = self.transport.do(request)
        if resp.status_code >= 400:
            raise self._error_for(resp)
        return resp.raw

    def execute_json(self, request: Any, model: Any = None) -> Any:
        """Send ``request`` and decode the body as JSON.

        Args:
            request: Prepared request handed to the transport.
            model: Optional type (pydantic model, dataclass, TypedDict, ...)
                the decoded value is validated into.

        Raises:
            json.JSONDecodeError: Body was not valid JSON.
            pydantic.ValidationError: Decoded value did not fit ``model``.
        """
        with _released(self.execute(request)) as body:
            payload = read_json(body)
        if model is None:
            return payload
        return TypeAdapter(model).validate_python(payload)

    def execute_string(self, request: Any) -> str:
        with _released(self.execute(request)) as body:
            return read_string(body)

    def execute_void(self, request: Any) -> None:
        """Send ``request`` and discard the body.

        Only transport and classified errors are raised; failures while
        draining the body are logged and ignored.
        """
        with _released(self.execute(request)) as body:
            try:
                read_void(body)
            except Exception as exc:
                _log.debug("Ignoring error while discarding response body: %s", exc)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _error_for(self, resp: TransportResponse) -> BaseException:
        status = resp.status_code
        request_id = self._request_id(resp)
        with _released(resp.raw) as body:
            try:
                text = read_string(body)
            except Exception as exc:
                _log.debug("Could not read error body (HTTP %s): %s", status, exc)
                _drain_quietly(body)
                text = ""
        message = text or _status_phrase(resp)
        payload = parse_error_payload(text)
        error_cls = ClientError if status < 500 else ServerError
        err: ResponseError = error_cls(
            message,
            status=status,
            request_id=request_id,
            code=extract_error_code(payload),
            hint=extract_error_hint(payload),
            payload=payload,
        )
        _log.debug(
            "%s for HTTP %s (request id %r)", error_cls.__name__, status, request_id
        )
        transformed = self.error_transform(status, err)
        if not isinstance(transformed, BaseException):
            raise TypeError(
                f"error_transform must return an exception, got {type(transformed).__name__}"
            )
        return transformed

    def _request_id(self, resp: TransportResponse) -> str:
        if not self.request_id_header:
            return ""
        headers = getattr(resp, "headers", None) or {}
        return headers.get(self.request_id_header) or ""


@contextmanager
def _released(stream: BinaryIO) -> Iterator[BinaryIO]:
    """Yield ``stream`` and close it on exit; close failures never escape."""
    try:
        yield stream
    finally:
        try:
            stream.close()
        except Exception as exc:
            _log.debug("Ignoring error while closing response body: %s", exc)


def _status_phrase(resp: TransportResponse) -> str:
    reason = getattr(resp, "reason", None)
    if reason:
        return str(reason)
    try:
        return HTTPStatus(resp.status_code).phrase
    except ValueError:
        return f"HTTP {resp.status_code}"


# ----------------------------------------------------------------------
# Stream helpers. None of them close the stream.
# ----------------------------------------------------------------------
def read_string(stream: BinaryIO) -> str:
    """Read the remaining bytes of ``stream`` as UTF-8 text."""
    data = stream.read()
    if isinstance(data, str):
        return data
    return (data or b"").decode("utf-8", errors="replace")


def read_json(stream: BinaryIO) -> Any:
    """Decode the first JSON value in the remaining bytes of ``stream``.

    Anything after that value is ignored. On failure whatever is left of the
    stream is drained before the original error is re-raised.
    """
    try:
        data = stream.read() or b""
        text = data if isinstance(data, str) else data.decode("utf-8")
        value, _ = _JSON_DECODER.raw_decode(text.lstrip())
        return value
    except Exception:
        _drain_quietly(stream)
        raise


def read_void(stream: BinaryIO) -> None:
    drain(stream)


def drain(stream: BinaryIO) -> int:
    """Read and discard the rest of ``stream``; return the byte count."""
    total = 0
    while True:
        chunk = stream.read(_CHUNK_SIZE)
        if not chunk:
            return total
        total += len(chunk)


def _drain_quietly(stream: BinaryIO) -> None:
    try:
        drain(stream)
    except Exception as exc:
        _log.debug("Ignoring error while draining response body: %s", exc)


__all__ = [
    "ResponseExecutor",
    "drain",
    "read_json",
    "read_string",
    "read_void",
]
