from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import CaptureError, StorageError
from .service import ScanResult

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _scan_response(result: ScanResult):
        return jsonify(result.to_dict()), (200 if result.ok else 400)

    def _storage_failure(e: StorageError):
        logger.error("Check-in not recorded, storage failure: %s", e)
        return jsonify({"success": False, "status": "ERROR", "message": "Storage unavailable, please retry"}), 503

    @app.route("/api/scan", methods=["POST"], endpoint="api_scan")
    def api_scan():
        """Record a check-in from the decoded QR text: {"code": "<payload>"}."""
        data = request.get_json(silent=True) or {}
        raw = str(data.get("code", "")).strip()
        if not raw:
            return jsonify({"success": False, "status": "ERROR", "message": "QR code must not be empty"}), 400

        try:
            result = container.checkin_service.process(raw)
        except StorageError as e:
            return _storage_failure(e)
        return _scan_response(result)

    @app.route("/api/scan/image", methods=["POST"], endpoint="api_scan_image")
    def api_scan_image():
        """Decode a QR code from an uploaded still image and record the check-in."""
        from .capture import decode_qr_image

        if "image" not in request.files:
            return jsonify({"success": False, "status": "ERROR", "message": "Missing image file"}), 400

        try:
            raw = decode_qr_image(request.files["image"].stream)
        except CaptureError as e:
            return jsonify({"success": False, "status": "ERROR", "message": str(e)}), 400
        if not raw:
            return jsonify({"success": False, "status": "ERROR", "message": "No QR code found in image"}), 400

        try:
            result = container.checkin_service.process(raw)
        except StorageError as e:
            return _storage_failure(e)
        return _scan_response(result)

    @app.route("/api/events/<int:event_id>/attendees", endpoint="api_event_attendees")
    def api_event_attendees(event_id: int):
        if not container.events.exists(event_id):
            return jsonify({"success": False, "message": "Event not found"}), 404
        attendees = container.ledger.get_attendees_for_event(event_id)
        return jsonify({"eventId": event_id, "count": len(attendees), "attendees": attendees})

    @app.route("/api/events/<int:event_id>/attendees/<member_id>", endpoint="api_member_present")
    def api_member_present(event_id: int, member_id: str):
        return jsonify(
            {
                "eventId": event_id,
                "memberId": member_id,
                "present": container.ledger.is_member_present(event_id, member_id),
            }
        )

    @app.errorhandler(StorageError)
    def handle_storage_error(e: StorageError):
        return _storage_failure(e)
