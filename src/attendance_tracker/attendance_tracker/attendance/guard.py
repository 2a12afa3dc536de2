from __future__ import annotations

from ..catalog.subjects import normalize_code
from ..totals.resolver import resolve
from ..totals.service import TotalsService
from .model import CapacityCheck
from .repository import AttendanceRepository


class CapacityGuard:
    """Advisory check that a student has lectures left to mark for a subject.

    The check and the later insert are separate store calls, so two concurrent
    marks on different days can both pass. Only same-day duplicates are
    rejected by the store.
    """

    def __init__(self, attendance: AttendanceRepository, totals: TotalsService):
        self._attendance = attendance
        self._totals = totals

    def can_mark(self, *, student_id: str, subject_code: str, group: str) -> CapacityCheck:
        code = normalize_code(subject_code)
        total = resolve(group, subject_code, self._totals.get_overrides(student_id))
        attended = self._attendance.count_for_subject(student_id=student_id, subject=code)
        return CapacityCheck(allowed=total == 0 or attended < total, attended=attended, total=total)
