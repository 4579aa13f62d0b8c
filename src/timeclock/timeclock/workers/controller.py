from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, error_response
from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/workers", methods=["GET"], endpoint="list_workers")
    def list_workers():
        workers = container.worker_service.list_workers()
        return jsonify([w.to_dict() for w in workers])

    @app.route("/api/admin/workers", methods=["POST"], endpoint="create_worker")
    @admin_required
    def create_worker():
        data = request.get_json(silent=True) or {}
        try:
            worker_id = container.worker_service.create_worker(
                name=data.get("name", ""),
                image_url=data.get("image_url"),
                hourly_rate=data.get("hourly_rate", 0),
            )
        except ValidationError as e:
            return error_response(str(e), 400)
        return jsonify({"success": True, "message": "Lavoratore aggiunto", "id": worker_id}), 201

    @app.route("/api/admin/workers/<worker_id>", methods=["PUT"], endpoint="update_worker")
    @admin_required
    def update_worker(worker_id: str):
        data = request.get_json(silent=True) or {}
        try:
            container.worker_service.update_worker(
                worker_id,
                name=data.get("name", ""),
                image_url=data.get("image_url"),
                hourly_rate=data.get("hourly_rate", 0),
            )
        except ValidationError as e:
            return error_response(str(e), 400)
        except NotFoundError as e:
            return error_response(str(e), 404)
        return jsonify({"success": True, "message": "Lavoratore aggiornato"})

    @app.route("/api/admin/workers/<worker_id>", methods=["DELETE"], endpoint="delete_worker")
    @admin_required
    def delete_worker(worker_id: str):
        if not container.worker_service.delete_worker(worker_id):
            return error_response("Lavoratore non trovato", 404)
        return jsonify({"success": True, "message": "Lavoratore eliminato"})
