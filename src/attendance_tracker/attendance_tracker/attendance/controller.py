from __future__ import annotations

from dataclasses import asdict

from flask import Flask, request, session

from ..catalog.preferences import GroupPreference
from ..common.datetime_utils import parse_iso_date
from ..common.web import current_student_id, fail, json_body, login_required, ok
from ..container import Container
from ..core.enums import MarkOutcome
from ..core.exceptions import StoreError, ValidationError

_MARK_STATUS = {
    MarkOutcome.MARKED: 201,
    MarkOutcome.ALREADY_MARKED: 409,
    MarkOutcome.CAPACITY_REACHED: 409,
    MarkOutcome.FAILED: 500,
}


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _group_arg() -> str:
        return request.args.get("group") or GroupPreference(session).get()

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        try:
            records = service.history_ui(current_student_id())
        except StoreError as e:
            return fail(str(e) or "Failed to fetch data", 500)
        return ok(records=records)

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_mark")
    @login_required
    def attendance_mark():
        data = json_body()
        try:
            day = parse_iso_date(str(data["date"])) if data.get("date") else None
        except ValueError:
            return fail("Date must be YYYY-MM-DD", 400)

        try:
            result = service.mark_attendance(
                student_id=current_student_id(),
                subject_code=str(data.get("subject") or ""),
                attendance_date=day,
                group=data.get("group"),
            )
        except ValidationError as e:
            return fail(str(e), 400)
        except StoreError as e:
            return fail(str(e) or "Failed to mark attendance", 500)

        payload = {"success": result.ok, "outcome": result.outcome.value, "message": result.message}
        if result.record:
            payload["record"] = {
                "id": result.record.attendance_id,
                "subject": result.record.subject,
                "date": result.record.attendance_date.strftime("%Y-%m-%d"),
            }
        if result.capacity:
            payload["capacity"] = asdict(result.capacity)
        return payload, _MARK_STATUS[result.outcome]

    @app.route("/api/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="attendance_delete")
    @login_required
    def attendance_delete(attendance_id: int):
        try:
            service.delete_record(student_id=current_student_id(), attendance_id=attendance_id)
        except ValidationError as e:
            return fail(str(e), 404)
        except StoreError as e:
            return fail(str(e) or "Failed to delete attendance record", 500)
        return ok(message="Attendance record deleted successfully")

    @app.route("/api/attendance", methods=["DELETE"], endpoint="attendance_delete_all")
    @login_required
    def attendance_delete_all():
        try:
            deleted = service.delete_all(current_student_id())
        except StoreError as e:
            return fail(str(e) or "Failed to delete all attendance records", 500)
        return ok(deleted=deleted, message="All your attendance records were deleted successfully.")

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    @login_required
    def attendance_summary():
        group = _group_arg()
        try:
            rows = service.summary(student_id=current_student_id(), group=group)
        except ValidationError as e:
            return fail(str(e), 400)
        except StoreError as e:
            return fail(str(e) or "Failed to fetch data", 500)
        return ok(group=group, subjects=[asdict(r) for r in rows])

    @app.route("/api/attendance/capacity", methods=["GET"], endpoint="attendance_capacity")
    @login_required
    def attendance_capacity():
        try:
            check = service.can_mark(
                student_id=current_student_id(),
                subject_code=request.args.get("subject", ""),
                group=_group_arg(),
            )
        except ValidationError as e:
            return fail(str(e), 400)
        except StoreError as e:
            return fail(str(e) or "Failed to fetch data", 500)
        return ok(**asdict(check))
