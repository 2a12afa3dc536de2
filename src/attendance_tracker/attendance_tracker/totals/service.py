from __future__ import annotations

from typing import Optional

from ..catalog.subjects import SUBJECT_TOTALS, is_known_group
from ..common.validators import require_non_empty, require_non_negative_int
from ..core.constants import TOTALS_TABLE
from ..core.enums import ChangeKind
from ..core.exceptions import ValidationError
from ..realtime.feed import ChangeEvent, ChangeFeed
from .model import SubjectTotalOverride
from .repository import TotalsRepository
from .resolver import effective_totals


class TotalsService:
    """Use case: read and edit a student's per-subject lecture totals."""

    def __init__(self, totals: TotalsRepository, *, feed: Optional[ChangeFeed] = None):
        self._totals = totals
        self._feed = feed

    def get_overrides(self, student_id: str) -> dict[str, int]:
        return {o.subject: o.total for o in self._totals.list_for_student(student_id)}

    def get_effective_totals(self, student_id: str, group: str) -> dict[str, int]:
        if not is_known_group(group):
            raise ValidationError(f"Unknown group: {group or '-'}")
        return effective_totals(group, self.get_overrides(student_id))

    def set_override(self, *, student_id: str, subject: str, group: str, total: object) -> SubjectTotalOverride:
        total = require_non_negative_int(total, "Total")
        subject = require_non_empty(subject, "Subject")
        if not is_known_group(group):
            raise ValidationError(f"Unknown group: {group or '-'}")
        if subject not in SUBJECT_TOTALS[group]:
            raise ValidationError(f"Unknown subject for {group}: {subject}")

        saved = self._totals.upsert(student_id=student_id, subject=subject, group_name=group, total=total)
        if self._feed:
            self._feed.publish(ChangeEvent(TOTALS_TABLE, ChangeKind.UPDATE, saved.to_row()))
        return saved
