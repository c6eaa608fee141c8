"""
Centralized error handling for the API.

Error Hierarchy:
- APIError (4xx): Expected errors with messages safe to expose to clients
- Anything else becomes a generic 500 with an error_id, never internals

Every 4xx body has the same shape:
    {"error": <summary>, "message": <explanation>, ...details, "error_id": <id>}

Usage:
    from core.errors import NotFoundError, api_error_response

    # In a route - raise with safe message, the registered handler renders it
    raise NotFoundError("Post not found", message=f"Post with ID {post_id} does not exist")

    # In another error handler - render an APIError directly
    return api_error_response(RateLimitError("Too many requests"))
"""

import logging
import uuid
from typing import Any, Optional, Tuple

from flask import jsonify, request

logger = logging.getLogger(__name__)


# =============================================================================
# Exception Classes (4xx - Expected Errors)
# =============================================================================

class APIError(Exception):
    """
    Base class for expected API errors (4xx status codes).
    Messages are safe to expose to clients.
    """
    status_code = 400

    def __init__(
        self,
        error: str,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(error)
        self.error = error
        self.message = message
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        body = {"error": self.error}
        if self.message:
            body["message"] = self.message
        body.update(self.details)
        return body


class ValidationError(APIError):
    """Request validation failed (400)."""
    status_code = 400


class AuthenticationError(APIError):
    """Authentication failed (401)."""
    status_code = 401


class PermissionDeniedError(APIError):
    """Permission denied (403)."""
    status_code = 403


class NotFoundError(APIError):
    """Resource not found (404)."""
    status_code = 404


class ConflictError(APIError):
    """Resource conflict (409)."""
    status_code = 409


class RateLimitError(APIError):
    """Rate limit exceeded (429)."""
    status_code = 429


# =============================================================================
# Response Rendering
# =============================================================================

def api_error_response(e: APIError) -> Tuple[Any, int]:
    """Render an APIError as its JSON body plus an error_id for support reference."""
    error_id = str(uuid.uuid4())[:8]
    logger.warning(f"API error: {e}", extra={'error_id': error_id})
    body = e.to_dict()
    body["error_id"] = error_id
    return jsonify(body), e.status_code


def register_error_handlers(app):
    """
    Register Flask error handlers for APIError exceptions and HTTP errors.

    Call this in your Flask app factory:
        from core.errors import register_error_handlers
        register_error_handlers(app)
    """

    @app.errorhandler(APIError)
    def handle_api_error(e):
        """Handle all APIError subclasses."""
        return api_error_response(e)

    @app.errorhandler(404)
    def handle_not_found(e):
        return jsonify({
            "error": "Route not found",
            "message": f"{request.method} {request.path} is not a valid endpoint",
            "available_endpoints": "/api/info",
        }), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(e):
        return jsonify({
            "error": "Method not allowed",
            "message": f"{request.method} is not supported on {request.path}",
        }), 405

    @app.errorhandler(413)
    def handle_payload_too_large(e):
        return jsonify({
            "error": "Payload too large",
            "message": "Request body exceeds the configured size limit",
        }), 413

    @app.errorhandler(500)
    def handle_internal_error(e):
        """Handle unexpected 500 errors."""
        error_id = str(uuid.uuid4())[:8]
        logger.exception("Internal server error", extra={'error_id': error_id})
        return jsonify({
            "error": "Internal server error",
            "error_id": error_id
        }), 500
