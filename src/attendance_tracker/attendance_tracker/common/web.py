from __future__ import annotations

from functools import wraps

from flask import jsonify, request, session


def current_student_id() -> str:
    return str(session["user_id"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    """JSON object sent with the request; anything else reads as empty."""

    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def fail(message: str, status: int = 400):
    return jsonify({"success": False, "message": message}), status


def ok(status: int = 200, **payload):
    return jsonify({"success": True, **payload}), status
