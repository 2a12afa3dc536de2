from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SubjectTotalOverride:
    """A student's own lecture total for one subject, superseding the group default."""

    student_id: str
    subject: str
    group_name: str
    total: int

    def to_row(self) -> dict:
        return {
            "student_id": self.student_id,
            "subject": self.subject,
            "group_name": self.group_name,
            "total": self.total,
        }
