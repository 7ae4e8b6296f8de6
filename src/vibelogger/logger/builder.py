"""
Log entry construction.

LogEntryBuilder stamps every entry with its timestamp, correlation id,
environment snapshot and caller location, and sanitizes the context. It is
the one place entries are created, and neither of its entry points raises.

Exception logging accepts any value as "the error". The value is classified
into a closed set of kinds (ErrorKind) and each kind has one rendering
function, so the outcome for an exotic input is decided by inspection rather
than by catching whatever a generic formatter happens to throw.
"""

import json
import logging
import os
import sys
import traceback
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional

from vibelogger.core.environment import capture_environment
from vibelogger.logger.entry import LogEntry
from vibelogger.logger.levels import LogLevel
from vibelogger.logger.sanitize import sanitize_context, sanitize_value


class _Missing:
    """Marker for "no error value was passed at all"."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

UNKNOWN_ERROR_LABEL = "UnknownError"

_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_PACKAGE_DIR += os.sep
_LOGGING_DIR = os.path.dirname(os.path.abspath(logging.__file__)) + os.sep


class ErrorKind(Enum):
    """Shapes of value accepted as an error by exception logging."""

    EXCEPTION = "exception"
    PRIMITIVE = "primitive"
    MAPPING = "mapping"
    OBJECT = "object"
    ABSENT = "absent"


@dataclass(frozen=True)
class RenderedError:
    """Everything exception logging derives from an error value."""

    label: str
    description: str
    error_type: str
    original: Any
    stack_trace: Optional[str] = None

    @property
    def message(self) -> str:
        return f"{self.label}: {self.description}"


def classify_error(error: Any) -> ErrorKind:
    if error is MISSING or error is None:
        return ErrorKind.ABSENT
    if isinstance(error, BaseException):
        return ErrorKind.EXCEPTION
    if isinstance(error, (str, bytes, bytearray, int, float, bool)):
        return ErrorKind.PRIMITIVE
    if isinstance(error, Mapping):
        return ErrorKind.MAPPING
    return ErrorKind.OBJECT


def _safe_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return f"<unprintable {type(value).__name__}>"


def _render_exception(error: BaseException) -> RenderedError:
    name = type(error).__name__
    text = _safe_str(error)
    stack = None
    if error.__traceback__ is not None:
        try:
            stack = "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
        except Exception:
            stack = None
    return RenderedError(
        label=name,
        description=text or name,
        error_type=name,
        original={
            "type": name,
            "message": text,
            "args": sanitize_value(getattr(error, "args", ())),
        },
        stack_trace=stack,
    )


def _render_primitive(error: Any) -> RenderedError:
    original = sanitize_value(error)
    return RenderedError(
        label=UNKNOWN_ERROR_LABEL,
        description=_safe_str(original),
        error_type=type(error).__name__,
        original=original,
    )


def _render_mapping(error: Mapping) -> RenderedError:
    original = sanitize_value(error)
    return RenderedError(
        label=UNKNOWN_ERROR_LABEL,
        description=json.dumps(original, ensure_ascii=False, default=str),
        error_type=type(error).__name__,
        original=original,
    )


def _render_object(error: Any) -> RenderedError:
    text = _safe_str(error)
    return RenderedError(
        label=UNKNOWN_ERROR_LABEL,
        description=text,
        error_type=type(error).__name__,
        original=text,
    )


def _render_absent(error: Any) -> RenderedError:
    if error is MISSING:
        return RenderedError(
            label=UNKNOWN_ERROR_LABEL,
            description="no error value provided",
            error_type="NoValue",
            original="<no value>",
        )
    return RenderedError(
        label=UNKNOWN_ERROR_LABEL,
        description="None",
        error_type="NoneType",
        original="None",
    )


_RENDERERS: Dict[ErrorKind, Callable[[Any], RenderedError]] = {
    ErrorKind.EXCEPTION: _render_exception,
    ErrorKind.PRIMITIVE: _render_primitive,
    ErrorKind.MAPPING: _render_mapping,
    ErrorKind.OBJECT: _render_object,
    ErrorKind.ABSENT: _render_absent,
}


def render_error(error: Any = MISSING) -> RenderedError:
    """Classify ``error`` and render it. Never raises."""
    try:
        return _RENDERERS[classify_error(error)](error)
    except Exception:
        name = _safe_type_name(error)
        return RenderedError(
            label=UNKNOWN_ERROR_LABEL,
            description=f"<unrenderable {name}>",
            error_type=name,
            original=f"<unrenderable {name}>",
        )


def _safe_type_name(value: Any) -> str:
    try:
        return type(value).__name__
    except Exception:
        return "object"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def caller_source() -> Optional[str]:
    """
    Location of the first frame outside vibelogger and the logging module.

    Returns ``"path:line in function"`` or None when no frame is found.
    """
    try:
        frame = sys._getframe(1)
    except (AttributeError, ValueError):
        return None
    try:
        while frame is not None:
            filename = os.path.abspath(frame.f_code.co_filename)
            if not filename.startswith((_PACKAGE_DIR, _LOGGING_DIR)):
                return f"{filename}:{frame.f_lineno} in {frame.f_code.co_name}"
            frame = frame.f_back
        return None
    except Exception:
        return None
    finally:
        del frame


class LogEntryBuilder:
    """
    Builds fully populated LogEntry objects for one correlation id.

    Args:
        correlation_id: Id stamped on entries that do not override it
    """

    def __init__(self, correlation_id: str):
        self.correlation_id = correlation_id

    def build(
        self,
        level: Any,
        operation: str,
        message: str,
        *,
        context: Optional[Mapping[str, Any]] = None,
        human_note: Optional[str] = None,
        ai_todo: Optional[str] = None,
        correlation_id: Optional[str] = None,
        stack_trace: Optional[str] = None,
    ) -> LogEntry:
        """
        Build an entry. Never raises.

        ``level`` may be a LogLevel, a level name or a stdlib numeric level.
        An empty ``correlation_id`` means "use the builder's id".
        """
        return LogEntry(
            timestamp=utc_timestamp(),
            level=LogLevel.coerce(level).value,
            correlation_id=(
                str(correlation_id) if correlation_id else self.correlation_id
            ),
            operation=_safe_str(operation),
            message=_safe_str(message),
            context=sanitize_context(context),
            environment=capture_environment(),
            source=caller_source(),
            stack_trace=stack_trace,
            human_note=None if human_note is None else _safe_str(human_note),
            ai_todo=None if ai_todo is None else _safe_str(ai_todo),
        )

    def build_from_exception(
        self,
        operation: str,
        error: Any = MISSING,
        *,
        context: Optional[Mapping[str, Any]] = None,
        human_note: Optional[str] = None,
        ai_todo: Optional[str] = None,
        correlation_id: Optional[str] = None,
        level: Any = LogLevel.ERROR,
    ) -> LogEntry:
        """
        Build an entry describing ``error``, whatever its type. The level
        defaults to ERROR.

        The message is ``"<label>: <description>"``; ``error_type`` and
        ``original_error`` are added to the context, and ``stack_trace`` is
        set when the error carries a traceback.
        """
        rendered = render_error(error)
        merged = sanitize_context(context)
        merged["error_type"] = rendered.error_type
        merged["original_error"] = rendered.original
        return self.build(
            level,
            operation,
            rendered.message,
            context=merged,
            human_note=human_note,
            ai_todo=ai_todo,
            correlation_id=correlation_id,
            stack_trace=rendered.stack_trace,
        )
