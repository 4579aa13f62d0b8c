from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, error_response, result_response
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/sessions", methods=["GET"], endpoint="active_sessions")
    def active_sessions():
        return jsonify([s.to_dict() for s in service.get_active_sessions()])

    @app.route("/api/checkin", methods=["POST"], endpoint="checkin")
    def checkin():
        data = request.get_json(silent=True) or {}
        worker_id = str(data.get("worker_id") or "").strip()
        if not worker_id:
            return error_response("Lavoratore non specificato", 400)
        return result_response(service.check_in(worker_id))

    @app.route("/api/checkout", methods=["POST"], endpoint="checkout")
    def checkout():
        data = request.get_json(silent=True) or {}
        worker_id = str(data.get("worker_id") or "").strip()
        if not worker_id:
            return error_response("Lavoratore non specificato", 400)
        return result_response(service.check_out(worker_id))

    @app.route("/api/admin/settings/auto-close", methods=["GET"], endpoint="get_auto_close_settings")
    @admin_required
    def get_auto_close_settings():
        return jsonify(service.get_auto_close_settings().to_dict())

    @app.route("/api/admin/settings/auto-close", methods=["PUT"], endpoint="update_auto_close_settings")
    @admin_required
    def update_auto_close_settings():
        data = request.get_json(silent=True) or {}
        return result_response(
            service.update_auto_close_settings(str(data.get("time", "")), data.get("enabled", True))
        )

    @app.route("/api/admin/auto-close", methods=["POST"], endpoint="run_auto_close")
    @admin_required
    def run_auto_close():
        data = request.get_json(silent=True) or {}
        result = service.auto_close_sessions(data.get("close_time") or None)
        return jsonify(result.to_dict())

    @app.route("/api/admin/force-close", methods=["POST"], endpoint="force_close")
    @admin_required
    def force_close():
        data = request.get_json(silent=True) or {}
        result = service.force_close_all_sessions(data.get("close_time") or None)
        return jsonify(result.to_dict())

    @app.route("/api/admin/entries", methods=["POST"], endpoint="add_manual_entry")
    @admin_required
    def add_manual_entry():
        data = request.get_json(silent=True) or {}
        worker_id = str(data.get("worker_id") or "")
        worker_name = data.get("worker_name")
        if not worker_name and worker_id:
            worker = container.worker_service.get_worker(worker_id)
            worker_name = worker.name if worker else ""
        result = service.add_manual_time_entry(
            worker_id,
            str(worker_name or ""),
            str(data.get("date", "")),
            str(data.get("check_in", "")),
            str(data.get("check_out", "")),
        )
        return result_response(result, created=True)

    @app.route("/api/admin/entries/<entry_id>", methods=["PUT"], endpoint="update_entry")
    @admin_required
    def update_entry(entry_id: str):
        data = request.get_json(silent=True) or {}
        result = service.update_time_entry(
            entry_id,
            str(data.get("check_in", "")),
            str(data.get("check_out", "")),
            str(data.get("date", "")),
        )
        return result_response(result)

    @app.route("/api/admin/entries/<entry_id>", methods=["DELETE"], endpoint="delete_entry")
    @admin_required
    def delete_entry(entry_id: str):
        if not service.delete_time_entry(entry_id):
            return error_response("Registrazione non trovata", 404)
        return jsonify({"success": True, "message": "Registrazione eliminata"})
