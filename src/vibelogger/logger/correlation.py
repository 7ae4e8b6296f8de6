"""
Correlation id generation.

All entries from one VibeLogger share a correlation id so that a reviewer
can group the lines of one session or component.
"""

import uuid
from typing import Optional


def generate_correlation_id() -> str:
    """Return a fresh random (UUID4) correlation id."""
    return str(uuid.uuid4())


def resolve_correlation_id(value: Optional[str] = None) -> str:
    """
    Echo an explicit id, or generate one.

    ``None`` and the empty string both mean "no override".
    """
    if value:
        return str(value)
    return generate_correlation_id()
