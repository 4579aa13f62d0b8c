from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..attendance.model import SessionResult
from ..core.enums import ResultKind

STATUS_BY_KIND = {
    ResultKind.OK: 200,
    ResultKind.NO_SESSION: 200,
    ResultKind.VALIDATION: 400,
    ResultKind.INVALID_TIME_RANGE: 400,
    ResultKind.NOT_FOUND: 404,
    ResultKind.DUPLICATE_ENTRY: 409,
    ResultKind.ALREADY_ACTIVE: 409,
}


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not session.get("is_admin"):
            return jsonify({"success": False, "message": "Accesso riservato all'amministratore"}), 401
        return view(*args, **kwargs)

    return wrapper


def result_response(result: SessionResult, *, created: bool = False):
    status = STATUS_BY_KIND.get(result.kind, 400)
    if created and result.success:
        status = 201
    return jsonify(result.to_dict()), status


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status
