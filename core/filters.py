# =============================================================================
# core/filters.py  —  Filter Encoder
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Converts a filter description (a plain dict) into the query-string
#   convention every IcePanel list endpoint understands:
#
#     {"type": ["system", "actor"], "external": False, "parentId": None}
#
#   becomes
#
#     filter[type][]=system
#     filter[type][]=actor
#     filter[external]=false
#     filter[parentId]=null
#
# THE RULES:
#   - scalar             →  filter[key]=value   (booleans as true/false)
#   - None (explicit)    →  filter[key]=null
#   - list / tuple       →  filter[key][]=item, once per item, in order
#   - dict under labels  →  filter[labels][labelKey]=labelValue
#   - UNSET              →  nothing at all
#
# Everything here is pure: same input, same output, no I/O.
# =============================================================================

from collections.abc import Mapping
from typing import Any, Optional
from urllib.parse import urlencode


class _Unset:
    """Marker for "no value given", distinct from an explicit None."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()

LABELS_KEY = "labels"


def _to_string(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_filter(filters: Optional[Mapping[str, Any]]) -> list[tuple[str, str]]:
    """Encode a filter description as ordered ``(key, value)`` query pairs.

    Args:
        filters: Filter key → value.  Keys missing from the mapping or set
            to ``UNSET`` are skipped; ``None`` is sent as the string "null".

    Returns:
        Query pairs in the mapping's order.  Empty input gives an empty list.

    Raises:
        TypeError: if a mapping value appears under a key other than
            ``labels``.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in (filters or {}).items():
        if value is UNSET:
            continue
        if isinstance(value, Mapping):
            if key != LABELS_KEY:
                raise TypeError(f"filter '{key}' cannot be a mapping")
            for label_key, label_value in value.items():
                pairs.append((f"filter[{LABELS_KEY}][{label_key}]", _to_string(label_value)))
        elif isinstance(value, (list, tuple)):
            for item in value:
                pairs.append((f"filter[{key}][]", _to_string(item)))
        else:
            pairs.append((f"filter[{key}]", _to_string(value)))
    return pairs


def build_query_string(filters: Optional[Mapping[str, Any]]) -> str:
    """URL-encode a filter description; empty filters give ``""``."""
    return urlencode(encode_filter(filters))


def with_query(path: str, filters: Optional[Mapping[str, Any]]) -> str:
    """Append the encoded filters to ``path`` (no ``?`` when there are none)."""
    query = build_query_string(filters)
    return f"{path}?{query}" if query else path
