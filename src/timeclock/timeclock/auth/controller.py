from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.web import error_response
from ..container import Container
from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/login", methods=["POST"], endpoint="admin_login")
    def admin_login():
        data = request.get_json(silent=True) or {}
        try:
            container.auth_service.authenticate(str(data.get("password", "")))
        except AuthenticationError as e:
            logger.warning("Failed admin login from %s", request.remote_addr)
            return error_response(str(e), 401)

        session["is_admin"] = True
        return jsonify({"success": True, "message": "Accesso effettuato"})

    @app.route("/api/admin/logout", methods=["POST"], endpoint="admin_logout")
    def admin_logout():
        session.pop("is_admin", None)
        return jsonify({"success": True, "message": "Disconnesso"})
