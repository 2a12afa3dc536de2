from __future__ import annotations

from flask import Flask, session

from ..common.web import fail, json_body, login_required, ok
from ..container import Container
from ..core.exceptions import ValidationError
from .preferences import GroupPreference
from .subjects import DASHBOARD_SUBJECTS, GROUPS, SUBJECT_TOTALS


def register(app: Flask, container: Container) -> None:
    @app.route("/api/catalog", methods=["GET"], endpoint="catalog")
    def catalog():
        return ok(
            groups=list(GROUPS),
            subjects=[{"code": s.code, "name": s.display_name} for s in DASHBOARD_SUBJECTS],
            totals=SUBJECT_TOTALS,
        )

    @app.route("/api/group", methods=["GET"], endpoint="group_get")
    @login_required
    def group_get():
        return ok(group=GroupPreference(session).get())

    @app.route("/api/group", methods=["PUT"], endpoint="group_set")
    @login_required
    def group_set():
        data = json_body()
        try:
            group = GroupPreference(session).set(str(data.get("group") or ""))
        except ValidationError as e:
            return fail(str(e), 400)
        return ok(group=group)
