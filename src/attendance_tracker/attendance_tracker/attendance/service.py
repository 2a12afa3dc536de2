from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..catalog.subjects import is_dashboard_code, is_known_group, normalize_code
from ..common.datetime_utils import format_display_date, today_local
from ..core.constants import ATTENDANCE_TABLE
from ..core.enums import ChangeKind, MarkOutcome
from ..core.exceptions import StoreError, UniqueViolation, ValidationError
from ..realtime.feed import ChangeEvent, ChangeFeed
from ..totals.service import TotalsService
from .aggregator import build_summary, subject_key
from .guard import CapacityGuard
from .model import AttendanceRecord, CapacityCheck, MarkResult, SubjectSummary
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        totals: TotalsService,
        *,
        guard: Optional[CapacityGuard] = None,
        feed: Optional[ChangeFeed] = None,
    ):
        self._attendance = attendance
        self._totals = totals
        self._guard = guard or CapacityGuard(attendance, totals)
        self._feed = feed

    def _publish(self, kind: ChangeKind, row: dict) -> None:
        if self._feed:
            self._feed.publish(ChangeEvent(ATTENDANCE_TABLE, kind, row))

    @staticmethod
    def _require_group(group: str) -> str:
        if not is_known_group(group):
            raise ValidationError(f"Unknown group: {group or '-'}")
        return group

    def can_mark(self, *, student_id: str, subject_code: str, group: str) -> CapacityCheck:
        self._require_group(group)
        return self._guard.can_mark(student_id=student_id, subject_code=subject_code, group=group)

    def mark_attendance(
        self,
        *,
        student_id: str,
        subject_code: str,
        attendance_date: Optional[date] = None,
        group: Optional[str] = None,
    ) -> MarkResult:
        code = normalize_code(subject_code)
        if not is_dashboard_code(code):
            raise ValidationError(f"Unknown subject: {subject_code or '-'}")
        if group is not None:
            self._require_group(group)
        today = today_local()
        attendance_date = attendance_date or today

        try:
            if group is not None:
                check = self._guard.can_mark(student_id=student_id, subject_code=code, group=group)
                if not check.allowed:
                    return MarkResult(
                        outcome=MarkOutcome.CAPACITY_REACHED,
                        message=f"All {check.total} lectures of {code} are already marked",
                        capacity=check,
                    )
            record = self._attendance.insert(student_id=student_id, subject=code, attendance_date=attendance_date)
        except UniqueViolation:
            when = "today" if attendance_date == today else f"on {format_display_date(attendance_date)}"
            return MarkResult(
                outcome=MarkOutcome.ALREADY_MARKED,
                message=f"You have already marked attendance for {code} {when}!",
            )
        except StoreError as e:
            logger.warning("Marking %s for %s failed: %s", code, student_id, e)
            return MarkResult(outcome=MarkOutcome.FAILED, message=str(e) or "Failed to mark attendance")

        self._publish(ChangeKind.INSERT, record.to_row())
        return MarkResult(
            outcome=MarkOutcome.MARKED,
            message=f"Successfully marked attendance for {code}",
            record=record,
        )

    def history(self, student_id: str) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_student(student_id)

    def history_ui(self, student_id: str) -> list[dict]:
        return [
            {
                "id": r.attendance_id,
                "subject": r.subject,
                "subject_name": subject_key(r.subject),
                "date": r.attendance_date.strftime("%Y-%m-%d"),
                "display_date": format_display_date(r.attendance_date),
            }
            for r in self.history(student_id)
        ]

    def delete_record(self, *, student_id: str, attendance_id: int) -> None:
        if not self._attendance.delete_for_student(student_id=student_id, attendance_id=int(attendance_id)):
            raise ValidationError("Attendance record not found")
        self._publish(ChangeKind.DELETE, {"id": int(attendance_id), "student_id": student_id})

    def delete_all(self, student_id: str) -> int:
        deleted = self._attendance.delete_all_for_student(student_id)
        self._publish(ChangeKind.DELETE, {"student_id": student_id})
        return deleted

    def summary(self, *, student_id: str, group: str) -> list[SubjectSummary]:
        self._require_group(group)
        records = self._attendance.list_for_student(student_id)
        return build_summary(records, group, self._totals.get_overrides(student_id))
