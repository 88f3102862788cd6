"""Query-string encoding for request parameters."""

from decimal import Decimal
from typing import Any, Mapping, Optional
from urllib.parse import quote

from .errors import EncodingError


def _encode_value(key: str, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float, Decimal)):
        return str(value)
    raise EncodingError(
        f"Parameter '{key}' has unsupported type {type(value).__name__}",
        {"key": key, "type": type(value).__name__},
    )


def encode_params(params: Optional[Mapping[str, Any]]) -> str:
    """
    Serialize ``params`` into a canonical ``application/x-www-form-urlencoded``
    string.

    Keys are sorted so equal mappings always encode identically, and both keys
    and values are percent-encoded per RFC 3986 so ``&`` and ``=`` inside a
    value can never be confused with separators.
    """
    if not params:
        return ""

    for key in params:
        check_key(key)

    pairs = []
    for key in sorted(params):
        value = _encode_value(key, params[key])
        pairs.append(f"{quote(key, safe='')}={quote(value, safe='')}")
    return "&".join(pairs)


def check_key(key: Any) -> None:
    """Raise :class:`EncodingError` unless ``key`` is a string."""
    if not isinstance(key, str):
        raise EncodingError(
            f"Parameter names must be strings, got {type(key).__name__}",
            {"key": repr(key)},
        )
