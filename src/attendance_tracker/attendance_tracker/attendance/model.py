from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import MarkOutcome


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark of a student for a subject on a day."""

    attendance_id: int
    student_id: str
    subject: str
    attendance_date: date

    def to_row(self) -> dict:
        return {
            "id": self.attendance_id,
            "student_id": self.student_id,
            "subject": self.subject,
            "date": self.attendance_date,
        }


@dataclass(frozen=True)
class SubjectSummary:
    """Read-model for the statistics panel."""

    subject: str
    attended: int
    raw_attended: int
    total: int
    percentage: Optional[int]


@dataclass(frozen=True)
class CapacityCheck:
    allowed: bool
    attended: int
    total: int


@dataclass(frozen=True)
class MarkResult:
    outcome: MarkOutcome
    message: str
    record: Optional[AttendanceRecord] = None
    capacity: Optional[CapacityCheck] = None

    @property
    def ok(self) -> bool:
        return self.outcome == MarkOutcome.MARKED
