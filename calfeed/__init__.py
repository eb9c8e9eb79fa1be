from flask import Flask, request

from calfeed.config import FeedConfig
from calfeed.context import ServiceContext
from calfeed.web import register_blueprints
from calfeed.web.session import EXTENSION_KEY


def create_app(context: ServiceContext | None = None) -> Flask:
    """Build the Flask app around a service context.

    Tables are created on startup so a fresh database works out of the box.
    """
    app = Flask(__name__)
    ctx = context or ServiceContext(FeedConfig.from_env())
    ctx.database.create_all()
    app.extensions[EXTENSION_KEY] = ctx

    cors_origin = ctx.config.cors_origin

    if cors_origin:

        @app.after_request
        def add_cors_headers(response):
            if request.headers.get("Origin") == cors_origin:
                response.headers["Access-Control-Allow-Origin"] = cors_origin
                response.headers["Access-Control-Allow-Credentials"] = "true"
                response.headers["Access-Control-Allow-Methods"] = (
                    "GET, POST, PUT, DELETE, OPTIONS"
                )
                response.headers["Access-Control-Allow-Headers"] = (
                    "Content-Type, Authorization"
                )
            return response

    register_blueprints(app)
    return app
