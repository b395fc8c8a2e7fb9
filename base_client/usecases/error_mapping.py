"""Translate classified response errors into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Optional

from base_client.adapters.api_errors import extract_error_hint
from base_client.domain.errors import ResponseError, ServerError
from base_client.domain.ports import UseCaseError

_CLIENT_CODES = {
    401: ("AUTH_FAILED", "Auth failed / API key invalid."),
    403: ("AUTH_FAILED", "Auth failed / API key invalid."),
    404: ("NOT_FOUND", "Resource not found"),
    409: ("CONFLICT", "Conflict"),
    422: ("INVALID_PARAMS", "Invalid parameters"),
    429: ("RATE_LIMITED", "Too many requests, slow down."),
}


def map_response_error(status: int, exc: BaseException) -> BaseException:
    """Map a classified error to a stable UseCaseError code.

    Signature matches ``ErrorTransform`` so it can be passed straight to
    ``ResponseExecutor(error_transform=...)``. Anything that is not a
    ``ResponseError`` is returned unchanged.

    Args:
        status (int): HTTP status code of the failed response.
        exc (BaseException): Classified error built by the executor.

    Returns:
        BaseException: ``UseCaseError`` with the classified error as cause.
    """
    if not isinstance(exc, ResponseError):
        return exc
    meta = {"status": status, "request_id": exc.request_id}
    if isinstance(exc, ServerError):
        mapped = UseCaseError("SERVER_ERROR", "Server error, try again.", meta=meta)
    else:
        code, base = _CLIENT_CODES.get(
            status, ("REQUEST_FAILED", f"Request failed (HTTP {status})")
        )
        hint = None if code == "AUTH_FAILED" else _hint_for(exc)
        mapped = UseCaseError(code, _compose_error_message(base, hint), meta=meta)
    mapped.__cause__ = exc
    return mapped


def _hint_for(exc: ResponseError) -> Optional[str]:
    return exc.hint or extract_error_hint(exc.payload) or exc.message


def _compose_error_message(base: str, hint: Optional[str]) -> str:
    """Compose a user-facing error message with optional hint text."""
    hint_text = (hint or "").strip()
    if hint_text:
        return f"{base}: {hint_text}"
    if base.endswith("."):
        return base
    return f"{base}."


__all__ = ["map_response_error"]
