from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_iso_date
from ..common.web import admin_required, error_response
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    def _range_args() -> tuple[str | None, str | None, str | None]:
        start = request.args.get("start") or None
        end = request.args.get("end") or None
        if start:
            start = require_iso_date(start, "Data di inizio")
        if end:
            end = require_iso_date(end, "Data di fine")
        return start, end, request.args.get("worker_id") or None

    @app.route("/api/admin/reports/entries", methods=["GET"], endpoint="report_entries")
    @admin_required
    def report_entries():
        try:
            start, end, worker_id = _range_args()
        except ValidationError as e:
            return error_response(str(e), 400)
        entries = reports.get_time_entries(start, end, worker_id)
        return jsonify([e.to_dict() for e in entries])

    @app.route("/api/admin/reports/monthly", methods=["GET"], endpoint="report_monthly")
    @admin_required
    def report_monthly():
        grouped = reports.get_time_entries_grouped_by_month(request.args.get("worker_id") or None)
        # A list keeps the most-recent-first order through JSON.
        return jsonify([
            {"month": month, "entries": [e.to_dict() for e in entries]}
            for month, entries in grouped.items()
        ])

    @app.route("/api/admin/reports/summary", methods=["GET"], endpoint="report_summary")
    @admin_required
    def report_summary():
        try:
            start, end, worker_id = _range_args()
        except ValidationError as e:
            return error_response(str(e), 400)
        return jsonify(reports.build_summary(start=start, end=end, worker_id=worker_id).to_dict())
