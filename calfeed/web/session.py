"""Request helpers: service lookup and the session guard."""

from functools import wraps

from flask import current_app, g, request

from calfeed.context import ServiceContext

EXTENSION_KEY = "calfeed"


def services() -> ServiceContext:
    return current_app.extensions[EXTENSION_KEY]


def require_session(view):
    """Reject the request unless it carries a valid session token.

    The authenticated email is available as ``g.user_email``.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        g.user_email = services().verifier.session_from_header(
            request.headers.get("Authorization")
        )
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    """Request JSON object, or an empty dict for missing/invalid bodies."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
