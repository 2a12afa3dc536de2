from __future__ import annotations

import json
import logging
import queue
from typing import Iterator, Optional

from ..core.constants import ATTENDANCE_TABLE, TOTALS_TABLE
from .feed import ChangeEvent, ChangeFeed, Subscription

logger = logging.getLogger(__name__)


def format_event(event: ChangeEvent) -> str:
    payload = {"table": event.table, "kind": event.kind.value, "row": dict(event.row)}
    return f"event: change\ndata: {json.dumps(payload, default=str)}\n\n"


class ChangeStream:
    """Server-sent event frames for one student's attendance and total rows.

    Subscribes on construction. Frames carry the changed table and row; clients
    re-fetch on every frame. A comment frame is emitted while idle so proxies
    keep the connection open.
    """

    HEARTBEAT = ": keep-alive\n\n"

    def __init__(self, feed: ChangeFeed, *, student_id: str, heartbeat_seconds: float = 15.0):
        self._feed = feed
        self._student_id = student_id
        self._heartbeat_seconds = heartbeat_seconds
        self._queue: "queue.Queue[ChangeEvent]" = queue.Queue()
        self._closed = False
        scope = {"student_id": student_id}
        self._subs: list[Subscription] = [
            feed.subscribe(table, scope, self._queue.put) for table in (ATTENDANCE_TABLE, TOTALS_TABLE)
        ]

    @property
    def closed(self) -> bool:
        return self._closed

    def next_frame(self, timeout: Optional[float] = None) -> str:
        wait = self._heartbeat_seconds if timeout is None else timeout
        try:
            return format_event(self._queue.get(timeout=wait))
        except queue.Empty:
            return self.HEARTBEAT

    def frames(self) -> Iterator[str]:
        try:
            while not self._closed:
                yield self.next_frame()
        finally:
            self.close()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        subs, self._subs = self._subs, []
        for sub in subs:
            try:
                self._feed.unsubscribe(sub)
            except Exception:
                logger.warning("Error removing subscription %s", sub.subscription_id, exc_info=True)
        logger.debug("change stream for %s closed", self._student_id)
