"""In-process change notifications scoped by table and row predicate."""
from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from ..core.enums import ChangeKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    table: str
    kind: ChangeKind
    row: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Subscription:
    subscription_id: int
    table: str
    filter: Mapping[str, Any]
    callback: Callable[[ChangeEvent], None]

    def matches(self, event: ChangeEvent) -> bool:
        if event.table != self.table:
            return False
        return all(event.row.get(col) == value for col, value in self.filter.items())


class ChangeFeed:
    """Publish/subscribe hub for row changes.

    Callbacks run synchronously on the publishing thread, outside the lock.
    A failing callback is logged and never reaches the publisher.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._subs: dict[int, Subscription] = {}

    def subscribe(
        self,
        table: str,
        filter: Optional[Mapping[str, Any]],
        callback: Callable[[ChangeEvent], None],
    ) -> Subscription:
        with self._lock:
            sub = Subscription(next(self._ids), table, dict(filter or {}), callback)
            self._subs[sub.subscription_id] = sub
        return sub

    def unsubscribe(self, subscription: Subscription) -> bool:
        with self._lock:
            return self._subs.pop(subscription.subscription_id, None) is not None

    def subscriber_count(self, table: Optional[str] = None) -> int:
        with self._lock:
            return sum(1 for s in self._subs.values() if table is None or s.table == table)

    def publish(self, event: ChangeEvent) -> int:
        with self._lock:
            targets = [s for s in self._subs.values() if s.matches(event)]

        for sub in targets:
            try:
                sub.callback(event)
            except Exception:
                logger.exception("Change callback %s failed for %s %s", sub.subscription_id, event.table, event.kind.value)
        return len(targets)
