"""Magic-link login routes."""

import logging
from urllib.parse import urlencode

from flask import Blueprint, jsonify, redirect, request

from calfeed.exceptions import AuthenticationError, CalfeedError, NotFoundError
from calfeed.web.session import json_body, services

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/auth/magic-link", methods=["POST"])
def request_magic_link():
    """Issue a magic link and email it. Delivery failures answer 500."""
    email = json_body().get("email") or request.form.get("email")
    services().issuer.request_magic_link(email)
    return jsonify({"success": True, "message": "Magic link sent"})


@auth_bp.route("/auth/verify/<token>", methods=["GET"])
def verify_magic_link(token: str):
    """Exchange a magic link for a session token and send the user to the frontend."""
    ctx = services()
    try:
        email = ctx.verifier.consume_magic_link(token)
    except (NotFoundError, AuthenticationError) as e:
        logger.info(f"Rejected magic link: {e}")
        return (
            "Invalid or expired link",
            400,
            {"Content-Type": "text/plain; charset=utf-8"},
        )

    session_token = ctx.issuer.issue_session(email)
    frontend_url = ctx.config.frontend_url.rstrip("/")
    return redirect(f"{frontend_url}/?{urlencode({'token': session_token})}")


@auth_bp.route("/api/auth/status", methods=["GET"])
def auth_status():
    """Report whether the request carries a valid session."""
    try:
        claims = services().verifier.decode_session(_bearer_token())
    except CalfeedError:
        return jsonify({"authenticated": False, "email": None})
    return jsonify(
        {
            "authenticated": True,
            "email": claims.email,
            "expiresAt": claims.expires_at.isoformat(),
        }
    )


def _bearer_token() -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None
