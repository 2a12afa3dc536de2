from __future__ import annotations

from flask import Flask

from ..common.web import current_student_id, fail, login_required, ok
from ..container import Container
from ..core.exceptions import StoreError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/profile", methods=["GET"], endpoint="profile")
    @login_required
    def profile():
        try:
            p = container.profile_service.get_profile(current_student_id())
        except ValidationError as e:
            return fail(str(e), 404)
        except StoreError as e:
            app.logger.warning("Profile fetch failed: %s", e)
            return fail(str(e) or "Failed to fetch data", 500)
        return ok(profile={"user_id": p.user_id, "name": p.name})
