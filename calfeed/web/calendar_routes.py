"""Calendar and event management routes. All require a session."""

import logging

from flask import Blueprint, g, jsonify
from pydantic import ValidationError as PydanticValidationError

from calfeed.exceptions import ValidationError
from calfeed.models.event import Event
from calfeed.subscription_urls import SubscriptionUrlGenerator
from calfeed.web.session import json_body, require_session, services

logger = logging.getLogger(__name__)

calendars_bp = Blueprint("calendars", __name__, url_prefix="/api/calendars")


def _urls() -> SubscriptionUrlGenerator:
    return SubscriptionUrlGenerator(services().config.backend_base_url)


def _calendar_response(calendar) -> dict:
    return {**calendar.to_api_dict(), **_urls().generate(calendar.id)}


@calendars_bp.route("", methods=["GET"])
@require_session
def list_calendars():
    calendars = services().calendars.list_calendars(owner_email=g.user_email)
    return jsonify([_calendar_response(c) for c in calendars])


def _optional_text(data: dict, *keys: str) -> str | None:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ValidationError(f"'{key}' must be a string")
        if value:
            return value
    return None


@calendars_bp.route("", methods=["POST"])
@require_session
def create_calendar():
    """Create a calendar; optionally mirror an upstream feed into it."""
    data = json_body()
    name = data.get("name")
    if name is not None and not isinstance(name, str):
        raise ValidationError("'name' must be a string")
    name = (name or "").strip()
    if not name:
        raise ValidationError("Calendar name is required")

    ctx = services()
    calendar = ctx.calendars.create_calendar(
        owner_email=g.user_email,
        name=name,
        description=_optional_text(data, "description"),
        source_url=_optional_text(data, "source_url", "sourceUrl"),
    )

    body = _calendar_response(calendar)
    if calendar.source_url:
        body["mirroredEvents"] = ctx.mirror.mirror_best_effort(calendar.id, calendar.source_url)
    return jsonify(body), 201


@calendars_bp.route("/<calendar_id>", methods=["GET"])
@require_session
def get_calendar(calendar_id: str):
    calendar = services().calendars.get_calendar(calendar_id, owner_email=g.user_email)
    return jsonify(_calendar_response(calendar))


@calendars_bp.route("/<calendar_id>", methods=["DELETE"])
@require_session
def delete_calendar(calendar_id: str):
    services().calendars.delete_calendar(calendar_id, owner_email=g.user_email)
    return jsonify({"success": True, "message": "Calendar and its events deleted"})


@calendars_bp.route("/<calendar_id>/events", methods=["GET"])
@require_session
def list_events(calendar_id: str):
    events = services().calendars.list_events(calendar_id, owner_email=g.user_email)
    return jsonify([e.to_api_dict() for e in events])


@calendars_bp.route("/<calendar_id>/events", methods=["POST"])
@require_session
def create_event(calendar_id: str):
    data = json_body()
    try:
        event = Event.model_validate({**data, "id": ""})
    except PydanticValidationError as e:
        raise ValidationError(_describe(e)) from e

    stored = services().calendars.add_event(calendar_id, event, owner_email=g.user_email)
    return jsonify({**stored.to_api_dict(), "message": "Event added to subscription feed"}), 201


@calendars_bp.route("/<calendar_id>/events/<event_id>", methods=["DELETE"])
@require_session
def delete_event(calendar_id: str, event_id: str):
    services().calendars.delete_event(calendar_id, event_id, owner_email=g.user_email)
    return jsonify({"success": True, "message": "Event deleted"})


def _describe(error: PydanticValidationError) -> str:
    parts = []
    for item in error.errors():
        field = ".".join(str(loc) for loc in item["loc"]) or "body"
        parts.append(f"{field}: {item['msg']}")
    return "; ".join(parts)
