"""
Global Flask error handling middleware.

All exceptions (custom or unexpected) are returned as JSON payloads:
{
    "status": "error",
    "error": "ErrorClassName",
    "message": "Developer-facing message",
    "display_message": "Localized message for the uploader",
    "details": { ... optional context ... }
}
"""

import os
import traceback

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from middleware.errors import BaseAppError
from utils.messages import SUPPORTED_LANGUAGES, describe_error


def request_language(default="en"):
    """Best UI language for the current request (``?lang=`` wins over Accept-Language)."""
    lang = (request.args.get("lang") or "").strip().lower()
    if lang in SUPPORTED_LANGUAGES:
        return lang
    return request.accept_languages.best_match(SUPPORTED_LANGUAGES) or default


def register_error_handlers(app):
    """Attach all JSON error handlers to a Flask app instance."""

    @app.errorhandler(BaseAppError)
    def handle_custom_error(err):
        """Handle custom, domain-specific errors."""
        payload = err.to_dict()
        payload["display_message"] = describe_error(err, request_language())
        app.logger.info("%s: %s %s", err.__class__.__name__, err.message, err.details)
        response = jsonify(payload)
        response.status_code = err.code
        return response

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        """Werkzeug errors (404, 405, 413 ...) keep their status code."""
        # Flask keys handlers by status code, so 400/422 app errors land here.
        if isinstance(err, BaseAppError):
            return handle_custom_error(err)
        payload = {
            "status": "error",
            "error": err.__class__.__name__,
            "message": err.description or err.name,
            "details": {},
        }
        return jsonify(payload), err.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(err):
        """Catch-all handler for unexpected exceptions."""
        app.logger.exception("Unhandled error: %s", err)
        details = {}
        if app.debug or os.getenv("FLASK_DEBUG") == "1":
            details["traceback"] = traceback.format_exc()

        payload = {
            "status": "error",
            "error": err.__class__.__name__,
            "message": str(err) or "Unexpected internal error",
            "display_message": describe_error(err, request_language()),
            "details": details
        }
        return jsonify(payload), 500
