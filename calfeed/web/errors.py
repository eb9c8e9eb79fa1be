"""Mapping of service exceptions to HTTP responses."""

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from calfeed.exceptions import (
    AuthenticationError,
    CalfeedError,
    DeliveryError,
    NotFoundError,
    RemoteFetchError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Checked in order; first matching class wins
STATUS_CODES: list[tuple[type[CalfeedError], int]] = [
    (ValidationError, 400),
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (RemoteFetchError, 502),
    (DeliveryError, 500),
    (StorageError, 500),
]

# Server-side failures get a generic message; details go to the log
PUBLIC_MESSAGES = {
    DeliveryError: "Failed to send email",
    StorageError: "Storage failure",
}


def status_for(error: CalfeedError) -> int:
    for error_class, status in STATUS_CODES:
        if isinstance(error, error_class):
            return status
    return 500


def register_error_handlers(app: Flask) -> None:
    """Turn every failure into a structured JSON response."""

    @app.errorhandler(CalfeedError)
    def handle_calfeed_error(error: CalfeedError):
        status = status_for(error)
        if status >= 500:
            logger.error(f"{error.__class__.__name__}: {error}")
        message = PUBLIC_MESSAGES.get(type(error), str(error))
        response = jsonify({"error": message})
        response.status_code = status
        if isinstance(error, AuthenticationError):
            response.headers["WWW-Authenticate"] = "Bearer"
        return response

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        response = jsonify({"error": error.description})
        response.status_code = error.code or 500
        return response

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        logger.exception(f"Unhandled error: {error}")
        response = jsonify({"error": "Internal server error"})
        response.status_code = 500
        return response
