"""Helpers for safe debug logging.

Login payloads carry credentials and session tokens. Command payloads are
passed through :func:`redact_for_log` before they reach a DEBUG log.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

REDACTED = "<redacted>"

_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "mot_de_passe",
        "token",
        "access_token",
        "refresh_token",
        "api_token",
        "authorization",
        "cookie",
        "secret",
    }
)

_MAX_DEPTH = 20


def is_sensitive_key(key: object) -> bool:
    return str(key).lower() in _SENSITIVE_KEYS


def _truncate(text: str, max_string: int) -> str:
    if len(text) <= max_string:
        return text
    return f"{text[:max_string]}…<truncated>"


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a copy of *value* with credential keys masked.

    *value* is expected to be JSON-like (mappings, lists, scalars). Strings
    longer than *max_string* are truncated; anything else is logged by repr.
    """
    if _depth > _MAX_DEPTH:
        return "<max-depth>"

    def _walk(item: Any) -> Any:
        return redact_for_log(item, max_string=max_string, _depth=_depth + 1)

    if isinstance(value, Mapping):
        return {str(k): REDACTED if is_sensitive_key(k) else _walk(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_walk(item) for item in value]
    if isinstance(value, str):
        return _truncate(value, max_string)
    if value is None or isinstance(value, (bool, int, float)):
        return value
    return _truncate(repr(value), max_string)
