"""
Deterministic JSON serialization for machine-readable reports.

Identical reports produce identical JSON: keys are sorted and sets are
emitted as sorted lists.
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePath
from typing import Any

import orjson


def _default_serializer(obj: Any) -> Any:
    """
    Serializer for types orjson does not handle natively.

    Raises:
        TypeError: If object cannot be serialized.
    """
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, PurePath):
        return obj.as_posix()
    if hasattr(obj, "model_dump"):
        return obj.model_dump()

    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def canonical_json_dumps(obj: Any, *, indent: bool = False) -> str:
    """
    Serialize object to canonical JSON string.

    Args:
        obj: Object to serialize.
        indent: If True, pretty-print with 2-space indentation.

    Returns:
        Canonical JSON string.

    Examples:
        >>> canonical_json_dumps({"b": 2, "a": 1})
        '{"a":1,"b":2}'
        >>> canonical_json_dumps({"paths": frozenset({"b", "a"})})
        '{"paths":["a","b"]}'
    """
    options = orjson.OPT_SORT_KEYS
    if indent:
        options |= orjson.OPT_INDENT_2

    return orjson.dumps(obj, default=_default_serializer, option=options).decode("utf-8")
