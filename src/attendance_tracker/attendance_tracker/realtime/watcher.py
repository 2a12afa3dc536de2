from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from ..attendance.model import AttendanceRecord, SubjectSummary
from ..attendance.service import AttendanceService
from ..catalog.subjects import is_known_group
from ..core.constants import ATTENDANCE_TABLE, TOTALS_TABLE
from ..core.exceptions import StoreError, ValidationError
from .feed import ChangeEvent, ChangeFeed, Subscription

logger = logging.getLogger(__name__)


class AttendanceWatcher:
    """Keeps one student's history and summary current.

    Any change to the student's attendance or total rows triggers a full
    re-fetch. A failed re-fetch keeps the previous state.
    """

    def __init__(
        self,
        service: AttendanceService,
        feed: ChangeFeed,
        *,
        student_id: str,
        group: str,
        on_refresh: Optional[Callable[["AttendanceWatcher"], None]] = None,
    ):
        if not is_known_group(group):
            raise ValidationError(f"Unknown group: {group or '-'}")
        self._service = service
        self._feed = feed
        self._student_id = student_id
        self._group = group
        self._on_refresh = on_refresh
        self._subs: list[Subscription] = []
        self._records: Sequence[AttendanceRecord] = ()
        self._summary: list[SubjectSummary] = []
        self.refresh_count = 0
        self.last_error: Optional[str] = None

    @property
    def records(self) -> Sequence[AttendanceRecord]:
        return self._records

    @property
    def summary(self) -> list[SubjectSummary]:
        return self._summary

    @property
    def group(self) -> str:
        return self._group

    def start(self) -> "AttendanceWatcher":
        self.refresh()
        scope = {"student_id": self._student_id}
        for table in (ATTENDANCE_TABLE, TOTALS_TABLE):
            self._subs.append(self._feed.subscribe(table, scope, self._on_change))
        return self

    def set_group(self, group: str) -> None:
        if not is_known_group(group):
            raise ValidationError(f"Unknown group: {group or '-'}")
        self._group = group
        self.refresh()

    def refresh(self) -> bool:
        try:
            records = self._service.history(self._student_id)
            summary = self._service.summary(student_id=self._student_id, group=self._group)
        except StoreError as e:
            logger.warning("Refresh for %s failed: %s", self._student_id, e)
            self.last_error = str(e)
            return False

        self._records, self._summary = records, summary
        self.last_error = None
        self.refresh_count += 1
        if self._on_refresh:
            self._on_refresh(self)
        return True

    def _on_change(self, event: ChangeEvent) -> None:
        logger.debug("%s %s for %s, refetching", event.table, event.kind.value, self._student_id)
        self.refresh()

    def close(self) -> None:
        subs, self._subs = self._subs, []
        for sub in subs:
            try:
                self._feed.unsubscribe(sub)
            except Exception:
                logger.warning("Error removing subscription %s", sub.subscription_id, exc_info=True)

    def __enter__(self) -> "AttendanceWatcher":
        return self.start()

    def __exit__(self, *exc) -> None:
        self.close()
