"""Best-effort inspection of error response bodies.

The executor keeps the raw body text as the error message; these helpers only
enrich a ``ResponseError`` with a structured payload, an error code and a
hint when the server sent JSON. None of them raise.
"""

from __future__ import annotations

import json
from typing import Any, Optional

_SNIPPET_LIMIT = 400
_DETAIL_KEYS = ("detail", "message", "error", "title")
_CODE_KEYS = ("code", "error_code", "error")
_HINT_KEYS = ("hint", "details", "errors", "messages")


def parse_error_payload(text: Optional[str]) -> Any:
    """Return decoded JSON for ``text``, else a trimmed snippet, else ``None``."""
    if not text:
        return None
    cleaned = text.strip()
    if not cleaned:
        return None
    if cleaned[0] in "{[":
        try:
            return json.loads(cleaned)
        except ValueError:
            pass
    return cleaned[:_SNIPPET_LIMIT]


def first_string(payload: Any) -> Optional[str]:
    """Find the first human-readable detail string in a decoded payload."""
    if isinstance(payload, str):
        text = payload.strip()
        return text or None
    if isinstance(payload, dict):
        for key in _DETAIL_KEYS:
            value = payload.get(key)
            if isinstance(value, (str, list, dict)):
                candidate = first_string(value)
                if candidate:
                    return candidate
    if isinstance(payload, list):
        for item in payload:
            candidate = first_string(item)
            if candidate:
                return candidate
    return None


def extract_error_code(payload: Any) -> Optional[str]:
    """Return a machine-readable error code from an object payload."""
    if not isinstance(payload, dict):
        return None
    for key in _CODE_KEYS:
        value = payload.get(key)
        if value is None or isinstance(value, (dict, list)):
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def extract_error_hint(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        for key in _HINT_KEYS:
            if key not in payload:
                continue
            text = stringify(payload[key])
            if text:
                return text
        return first_string(payload)
    if isinstance(payload, list):
        return stringify(payload)
    if isinstance(payload, str):
        return payload.strip() or None
    return None


def stringify(data: Any, *, limit: int = 200) -> Optional[str]:
    """Flatten nested payload fragments into one short line."""
    if data is None:
        return None
    if isinstance(data, str):
        cleaned = data.strip()
        return cleaned[:limit] if cleaned else None
    if isinstance(data, list):
        parts = [text for text in (stringify(item, limit=limit) for item in data[:3]) if text]
        return "; ".join(parts)[:limit] if parts else None
    if isinstance(data, dict):
        pairs = []
        for key, value in list(data.items())[:4]:
            value_text = stringify(value, limit=limit)
            if value_text:
                pairs.append(f"{key}={value_text}")
        return ", ".join(pairs)[:limit] if pairs else None
    text = str(data).strip()
    return text[:limit] if text else None


__all__ = [
    "extract_error_code",
    "extract_error_hint",
    "first_string",
    "parse_error_payload",
    "stringify",
]
