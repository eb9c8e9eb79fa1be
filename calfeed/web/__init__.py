"""HTTP surface of the calendar feed service."""

from flask import Flask

from calfeed.web.auth_routes import auth_bp
from calfeed.web.calendar_routes import calendars_bp
from calfeed.web.errors import register_error_handlers
from calfeed.web.feed_routes import feeds_bp


def register_blueprints(app: Flask) -> None:
    app.register_blueprint(feeds_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(calendars_bp)
    register_error_handlers(app)


__all__ = ["register_blueprints"]
