"""
The structured log entry.

LogEntry is the unit everything else in vibelogger works with: the buffer
stores it, the file sink writes it as one JSON line, and the AI export
serializes a list of them. Entries are frozen once built.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from vibelogger.core.environment import EnvironmentInfo


@dataclass(frozen=True)
class LogEntry:
    """
    A single structured log record.

    Attributes:
        timestamp: UTC ISO-8601 time the entry was built (``+00:00`` suffix)
        level: Severity name (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        correlation_id: Id grouping entries of one session or component
        operation: Short identifier of the logical action being logged
        message: Human-readable text
        context: JSON-serializable structured data
        environment: Runtime environment snapshot
        source: Caller location ``"file:line in function"``, best effort
        stack_trace: Formatted traceback, only set by exception logging
        human_note: Free-text note from a human for the AI reviewer
        ai_todo: Free-text request to the AI reviewer
    """

    timestamp: str
    level: str
    correlation_id: str
    operation: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)
    environment: Optional[EnvironmentInfo] = None
    source: Optional[str] = None
    stack_trace: Optional[str] = None
    human_note: Optional[str] = None
    ai_todo: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """All fields, with unset optional fields kept as None."""
        return {
            "timestamp": self.timestamp,
            "level": self.level,
            "correlation_id": self.correlation_id,
            "operation": self.operation,
            "message": self.message,
            "context": self.context,
            "environment": (
                self.environment.to_dict() if self.environment is not None else None
            ),
            "source": self.source,
            "stack_trace": self.stack_trace,
            "human_note": self.human_note,
            "ai_todo": self.ai_todo,
        }

    def to_json(self) -> str:
        """Serialize to a single line of JSON."""
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)
