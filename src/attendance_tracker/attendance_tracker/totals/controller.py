from __future__ import annotations

from flask import Flask, request, session

from ..catalog.preferences import GroupPreference
from ..common.web import current_student_id, fail, json_body, login_required, ok
from ..container import Container
from ..core.exceptions import StoreError, ValidationError


def register(app: Flask, container: Container) -> None:
    service = container.totals_service

    @app.route("/api/totals", methods=["GET"], endpoint="totals_get")
    @login_required
    def totals_get():
        group = request.args.get("group") or GroupPreference(session).get()
        try:
            overrides = service.get_overrides(current_student_id())
            effective = service.get_effective_totals(current_student_id(), group)
        except ValidationError as e:
            return fail(str(e), 400)
        except StoreError as e:
            return fail(str(e) or "Failed to fetch data", 500)
        return ok(group=group, overrides=overrides, effective=effective)

    @app.route("/api/totals", methods=["PUT"], endpoint="totals_set")
    @login_required
    def totals_set():
        data = json_body()
        try:
            saved = service.set_override(
                student_id=current_student_id(),
                subject=str(data.get("subject") or ""),
                group=str(data.get("group") or GroupPreference(session).get()),
                total=data.get("total"),
            )
        except ValidationError as e:
            return fail(str(e), 400)
        except StoreError as e:
            return fail(str(e) or "Failed to save total", 500)
        return ok(override=saved.to_row())
