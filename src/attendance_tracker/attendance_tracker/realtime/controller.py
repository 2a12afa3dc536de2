from __future__ import annotations

from flask import Flask, Response

from ..common.web import current_student_id, login_required
from ..container import Container
from .stream import ChangeStream


def register(app: Flask, container: Container) -> None:
    heartbeat = float(app.config.get("STREAM_HEARTBEAT_SECONDS", 15.0))

    @app.route("/api/changes", methods=["GET"], endpoint="changes_stream")
    @login_required
    def changes_stream():
        stream = ChangeStream(container.feed, student_id=current_student_id(), heartbeat_seconds=heartbeat)
        resp = Response(stream.frames(), mimetype="text/event-stream")
        resp.headers["Cache-Control"] = "no-cache"
        resp.headers["X-Accel-Buffering"] = "no"
        resp.call_on_close(stream.close)
        return resp
