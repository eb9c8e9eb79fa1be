"""Public feed and health routes."""

import re

from flask import Blueprint, Response, jsonify

from calfeed.web.session import services

feeds_bp = Blueprint("feeds", __name__)


def _safe_filename(name: str) -> str:
    return re.sub(r"[^a-zA-Z0-9]", "_", name) or "calendar"


@feeds_bp.route("/api/subscriptions/<calendar_id>/feed.ics", methods=["GET"])
def get_feed(calendar_id: str):
    """Serve a calendar as an ICS feed. No authentication."""
    ctx = services()
    snapshot = ctx.calendars.get_snapshot(calendar_id)
    return Response(
        ctx.writer.render(snapshot),
        content_type="text/calendar; charset=utf-8",
        headers={
            "Content-Disposition": f'inline; filename="{_safe_filename(snapshot.name)}.ics"',
            "Cache-Control": "no-cache, no-store, must-revalidate",
        },
    )


@feeds_bp.route("/health", methods=["GET"])
def health():
    ctx = services()
    return jsonify(
        {
            "status": "ok",
            "calendars": ctx.calendars.count_calendars(),
            "database": ctx.database.dialect,
        }
    )
