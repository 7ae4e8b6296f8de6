"""
Context sanitization.

Callers may put anything into a log context: functions, open sockets,
objects referring to themselves. The sanitizer turns any input into plain
JSON data (dicts with string keys, lists, strings, numbers, booleans, None)
and never raises. Values it cannot represent are replaced with a
placeholder string saying what was left out.

Cycles are detected with a set of the container ids on the current path, and
nesting is capped at MAX_DEPTH, so the walk always terminates.
"""

import dataclasses
import math
from datetime import date, datetime, time
from enum import Enum
from pathlib import PurePath
from typing import Any, Dict, Mapping, Optional, Set

MAX_DEPTH = 32

CIRCULAR_PLACEHOLDER = "<circular reference omitted>"
DEPTH_PLACEHOLDER = "<max depth exceeded>"


def sanitize_context(context: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Return a JSON-serializable copy of ``context``.

    A non-mapping context is wrapped as ``{"value": ...}`` rather than
    dropped.
    """
    if context is None:
        return {}
    if not isinstance(context, Mapping):
        return {"value": sanitize_value(context)}
    result = sanitize_value(context)
    if isinstance(result, dict):
        return result
    return {"value": result}


def sanitize_value(value: Any) -> Any:
    """Return a JSON-serializable rendering of any single value."""
    try:
        return _sanitize(value, set(), 0)
    except Exception:
        return _unrepresentable(value)


def _sanitize(value: Any, seen: Set[int], depth: int) -> Any:
    if value is None or isinstance(value, (bool, int, str)):
        if isinstance(value, Enum):
            return _sanitize(value.value, seen, depth)
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else str(value)
    if isinstance(value, Enum):
        return _sanitize(value.value, seen, depth)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, PurePath):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if callable(value) and not isinstance(value, type):
        name = getattr(value, "__qualname__", None) or type(value).__name__
        return f"<function {name} omitted: not serializable>"

    if depth >= MAX_DEPTH:
        return DEPTH_PLACEHOLDER

    marker = id(value)
    if marker in seen:
        return CIRCULAR_PLACEHOLDER

    if isinstance(value, Mapping):
        seen.add(marker)
        try:
            result: Dict[str, Any] = {}
            for k, v in value.items():
                result[_unique_key(k, result)] = _sanitize(v, seen, depth + 1)
            return result
        finally:
            seen.discard(marker)

    if isinstance(value, (list, tuple, set, frozenset)):
        seen.add(marker)
        try:
            return [_sanitize(item, seen, depth + 1) for item in value]
        finally:
            seen.discard(marker)

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        seen.add(marker)
        try:
            return {
                f.name: _sanitize(getattr(value, f.name, None), seen, depth + 1)
                for f in dataclasses.fields(value)
            }
        finally:
            seen.discard(marker)

    model_dump = getattr(value, "model_dump", None)
    if callable(model_dump) and not isinstance(value, type):
        seen.add(marker)
        try:
            return _sanitize(model_dump(), seen, depth + 1)
        finally:
            seen.discard(marker)

    try:
        return str(value)
    except Exception:
        return _unrepresentable(value)


def _key(key: Any) -> str:
    if isinstance(key, str):
        return key
    try:
        return str(key)
    except Exception:
        return _unrepresentable(key)


def _unique_key(key: Any, taken: Mapping[str, Any]) -> str:
    """
    String form of ``key`` not yet used in ``taken``.

    Keys that collide once stringified (``1`` and ``"1"``) keep both values:
    the later one is suffixed with its type name, then a counter.
    """
    text = _key(key)
    if text not in taken:
        return text
    candidate = f"{text} <{type(key).__name__}>"
    n = 2
    while candidate in taken:
        candidate = f"{text} <{type(key).__name__} {n}>"
        n += 1
    return candidate


def _unrepresentable(value: Any) -> str:
    return f"<unrepresentable {type(value).__name__}>"
