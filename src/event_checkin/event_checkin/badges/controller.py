from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..container import Container
from ..passes.qr import make_pass_png


def register(app: Flask, container: Container) -> None:
    @app.route("/api/members/<member_id>/badges", endpoint="api_member_badges")
    def api_member_badges(member_id: str):
        badges = container.badge_service.derive_badges_for_member(member_id)
        return jsonify({"memberId": member_id, "badges": [b.to_dict() for b in badges]})

    @app.route("/api/members/<member_id>/pass.png", endpoint="member_pass_image")
    def member_pass_image(member_id: str):
        """QR pass for a member; ?event=<id> pins the pass to one event."""
        event_id = request.args.get("event", type=int)
        buf = io.BytesIO(make_pass_png(member_id, event_id))
        return send_file(buf, mimetype="image/png")
