from datetime import date

import pytest

from src.attendance_tracker.attendance_tracker.core.constants import ATTENDANCE_TABLE
from src.attendance_tracker.attendance_tracker.core.enums import ChangeKind
from src.attendance_tracker.attendance_tracker.core.exceptions import StoreError, ValidationError
from src.attendance_tracker.attendance_tracker.realtime.feed import ChangeEvent, ChangeFeed
from src.attendance_tracker.attendance_tracker.realtime.watcher import AttendanceWatcher
from tests.fakes import make_container

CN = "Computer Network (CN)"


def test_feed_delivers_only_matching_rows():
    feed = ChangeFeed()
    seen = []
    feed.subscribe(ATTENDANCE_TABLE, {"student_id": "s1"}, seen.append)

    feed.publish(ChangeEvent(ATTENDANCE_TABLE, ChangeKind.INSERT, {"student_id": "s1"}))
    feed.publish(ChangeEvent(ATTENDANCE_TABLE, ChangeKind.INSERT, {"student_id": "s2"}))
    feed.publish(ChangeEvent("profiles", ChangeKind.UPDATE, {"student_id": "s1"}))

    assert len(seen) == 1


def test_unsubscribe_stops_delivery():
    feed = ChangeFeed()
    seen = []
    sub = feed.subscribe(ATTENDANCE_TABLE, None, seen.append)

    assert feed.unsubscribe(sub) is True
    assert feed.unsubscribe(sub) is False
    assert feed.publish(ChangeEvent(ATTENDANCE_TABLE, ChangeKind.DELETE, {})) == 0
    assert seen == []


def test_failing_callback_does_not_block_others():
    feed = ChangeFeed()
    seen = []

    def boom(event):
        raise RuntimeError("boom")

    feed.subscribe(ATTENDANCE_TABLE, None, boom)
    feed.subscribe(ATTENDANCE_TABLE, None, seen.append)

    assert feed.publish(ChangeEvent(ATTENDANCE_TABLE, ChangeKind.INSERT, {"student_id": "s1"})) == 2
    assert len(seen) == 1


def test_watcher_refetches_on_own_changes_only():
    c = make_container()
    svc = c.attendance_service

    with AttendanceWatcher(svc, c.feed, student_id="s1", group="TY CE-1") as watcher:
        assert watcher.refresh_count == 1

        svc.mark_attendance(student_id="s1", subject_code="CN", attendance_date=date(2024, 1, 1))
        svc.mark_attendance(student_id="s2", subject_code="CN", attendance_date=date(2024, 1, 1))

        assert watcher.refresh_count == 2
        assert len(watcher.records) == 1
        assert {r.subject: r for r in watcher.summary}[CN].attended == 1

        c.totals_service.set_override(student_id="s1", subject=CN, group="TY CE-1", total=4)
        assert {r.subject: r for r in watcher.summary}[CN].percentage == 25

        svc.delete_all("s1")
        assert watcher.records == []

    assert c.feed.subscriber_count() == 0


def test_watcher_keeps_state_when_refetch_fails():
    c = make_container()
    watcher = AttendanceWatcher(c.attendance_service, c.feed, student_id="s1", group="TY CE-1").start()
    c.attendance_service.mark_attendance(student_id="s1", subject_code="SE", attendance_date=date(2024, 1, 1))

    c.attendance_repo.fail_with = StoreError("offline")
    assert watcher.refresh() is False
    assert watcher.last_error == "offline"
    assert len(watcher.records) == 1
    watcher.close()


def test_watcher_close_swallows_unsubscribe_errors():
    class FlakyFeed(ChangeFeed):
        def unsubscribe(self, subscription):
            raise RuntimeError("channel already gone")

    c = make_container()
    watcher = AttendanceWatcher(c.attendance_service, FlakyFeed(), student_id="s1", group="TY CE-1").start()

    watcher.close()
    watcher.close()


def test_watcher_rejects_unknown_group():
    c = make_container()

    with pytest.raises(ValidationError):
        AttendanceWatcher(c.attendance_service, c.feed, student_id="s1", group="?")

    watcher = AttendanceWatcher(c.attendance_service, c.feed, student_id="s1", group="TY CE-1")
    watcher.set_group("TY CE-3")
    assert watcher.group == "TY CE-3"
    with pytest.raises(ValidationError):
        watcher.set_group("TY CE-0")


def test_change_stream_emits_own_changes_and_heartbeats():
    import json

    from src.attendance_tracker.attendance_tracker.realtime.stream import ChangeStream

    c = make_container()
    stream = ChangeStream(c.feed, student_id="s1", heartbeat_seconds=0.01)

    assert stream.next_frame() == ChangeStream.HEARTBEAT

    c.attendance_service.mark_attendance(student_id="s2", subject_code="CN", attendance_date=date(2024, 1, 1))
    c.attendance_service.mark_attendance(student_id="s1", subject_code="CN", attendance_date=date(2024, 1, 1))
    frame = stream.next_frame()

    assert frame.startswith("event: change\ndata: ")
    payload = json.loads(frame.split("data: ", 1)[1])
    assert payload["table"] == ATTENDANCE_TABLE
    assert payload["kind"] == "INSERT"
    assert payload["row"]["student_id"] == "s1"
    assert payload["row"]["date"] == "2024-01-01"
    assert stream.next_frame() == ChangeStream.HEARTBEAT


def test_change_stream_generator_unsubscribes_when_closed():
    from src.attendance_tracker.attendance_tracker.realtime.stream import ChangeStream

    c = make_container()
    stream = ChangeStream(c.feed, student_id="s1", heartbeat_seconds=0.01)
    frames = stream.frames()

    assert next(frames) == ChangeStream.HEARTBEAT
    frames.close()

    assert stream.closed
    assert c.feed.subscriber_count() == 0
    stream.close()
