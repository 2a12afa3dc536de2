from __future__ import annotations

from typing import Protocol, Sequence

from .model import SubjectTotalOverride


class TotalsRepository(Protocol):
    def list_for_student(self, student_id: str) -> Sequence[SubjectTotalOverride]:
        raise NotImplementedError

    def upsert(self, *, student_id: str, subject: str, group_name: str, total: int) -> SubjectTotalOverride:
        """Create or replace the override keyed by (student_id, subject)."""

        raise NotImplementedError
