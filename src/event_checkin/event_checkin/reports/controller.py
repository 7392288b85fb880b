from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..container import Container
from ..core.constants import ALL_CHAPTERS
from ..core.exceptions import EmptyDatasetError
from .exporter import csv_response_bytes, to_csv


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    def _csv_download(rows: list[dict], filename: str):
        try:
            text = to_csv(rows)
        except EmptyDatasetError:
            return jsonify({"success": False, "message": "Nothing to export"}), 404
        return app.response_class(
            csv_response_bytes(text),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/census", endpoint="api_census")
    def api_census():
        return jsonify(asdict(reports.census()))

    @app.route("/api/events/summary", endpoint="api_event_summary")
    def api_event_summary():
        return jsonify(
            [
                {
                    "event": asdict(s.event),
                    "attendeeCount": s.attendee_count,
                    "attendees": [asdict(m) for m in s.attendees],
                }
                for s in reports.per_event_summary()
            ]
        )

    @app.route("/api/engagement", endpoint="api_engagement")
    def api_engagement():
        chapter = request.args.get("chapter") or ALL_CHAPTERS
        return jsonify({"chapter": chapter, "chapters": reports.chapters(), "rows": reports.engagement_rows(chapter)})

    @app.route("/reports/attendance/<int:event_id>.csv", endpoint="attendance_report_csv")
    def attendance_report_csv(event_id: int):
        return _csv_download(reports.attendance_rows(event_id), f"attendance-{event_id}.csv")

    @app.route("/reports/engagement.csv", endpoint="engagement_report_csv")
    def engagement_report_csv():
        chapter = request.args.get("chapter") or ALL_CHAPTERS
        return _csv_download(reports.engagement_rows(chapter), "member-engagement.csv")
