from __future__ import annotations

from enum import Enum


class MarkOutcome(str, Enum):
    """Result of a mark-attendance attempt."""

    MARKED = "MARKED"
    ALREADY_MARKED = "ALREADY_MARKED"
    CAPACITY_REACHED = "CAPACITY_REACHED"
    FAILED = "FAILED"


class ChangeKind(str, Enum):
    """Kind of row change carried by the change feed."""

    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
