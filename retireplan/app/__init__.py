"""Application factory and app-wide configuration."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import BadRequest, HTTPException, RequestEntityTooLarge

from retireplan.app.api.routes import api_bp
from retireplan.config import Settings, get_settings
from retireplan.core.projection import ProjectionEngine
from retireplan.domain.validation import ValidationRules

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
}


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(settings: Optional[Settings] = None, engine: Optional[ProjectionEngine] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or get_settings()
    engine = engine or ProjectionEngine()
    configure_logging(settings)

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = settings.MAX_CONTENT_LENGTH
    app.config["DEBUG"] = settings.DEBUG
    app.extensions["retireplan.settings"] = settings
    app.extensions["retireplan.engine"] = engine
    app.extensions["retireplan.rules"] = ValidationRules(
        desired_age_floor=settings.DESIRED_AGE_FLOOR,
        portfolio_keys=engine.config.portfolio_keys,
    )

    CORS(app, resources={r"/*": {"origins": settings.CORS_ORIGINS}})

    @app.after_request
    def add_security_headers(response):
        for header, value in SECURITY_HEADERS.items():
            response.headers[header] = value
        return response

    @app.errorhandler(BadRequest)
    def _handle_bad_request(exc: BadRequest):
        logger.info("Rejected malformed request body: %s", exc.description)
        return (
            jsonify({"error": "Invalid JSON format", "message": "Please check your request body"}),
            HTTPStatus.BAD_REQUEST,
        )

    @app.errorhandler(RequestEntityTooLarge)
    def _handle_too_large(exc: RequestEntityTooLarge):
        return (
            jsonify({"error": "Payload too large", "message": f"Request body exceeds {settings.MAX_CONTENT_LENGTH} bytes"}),
            HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
        )

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            return jsonify({"error": exc.name, "message": exc.description}), exc.code
        logger.exception("Unhandled error while processing request")
        return (
            jsonify({"error": "Internal server error", "message": "Something went wrong processing your request"}),
            HTTPStatus.INTERNAL_SERVER_ERROR,
        )

    app.register_blueprint(api_bp)
    logger.info("retireplan app created (env=%s)", settings.APP_ENV)
    return app
