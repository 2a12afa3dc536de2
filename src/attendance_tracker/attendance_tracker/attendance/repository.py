from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Repository interface for the ``attendance`` table.

    Note (DIP): services depend on this interface, never on a concrete database.
    """

    def list_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        """Every row of the student, newest first."""

        raise NotImplementedError

    def count_for_subject(self, *, student_id: str, subject: str) -> int:
        raise NotImplementedError

    def insert(self, *, student_id: str, subject: str, attendance_date: date) -> AttendanceRecord:
        """Raises UniqueViolation when (student, subject, date) already exists."""

        raise NotImplementedError

    def delete_for_student(self, *, student_id: str, attendance_id: int) -> bool:
        raise NotImplementedError

    def delete_all_for_student(self, student_id: str) -> int:
        raise NotImplementedError
