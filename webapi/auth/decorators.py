"""
Flask route decorators for authentication and content integrity.

Provides:
- jwt_required: Require a valid bearer token (plain or content-bound)
- content_signature_required: Require the request body to match the
  payload signed into the bearer token (stack under jwt_required)
"""
from functools import wraps
from typing import Optional

from flask import g, jsonify, request

from core import log_event

from .content import verify_content
from .results import VerificationError, VerificationResult
from .tokens import decode_token

# Summary line for each failure kind
ERROR_SUMMARIES = {
    VerificationError.MISSING_TOKEN: "Access denied. No token provided.",
    VerificationError.MALFORMED_TOKEN: "Invalid token.",
    VerificationError.SIGNATURE: "Invalid token.",
    VerificationError.EXPIRED_TOKEN: "Token expired.",
    VerificationError.MISSING_SIGNATURE: "Content signature required for POST operations.",
    VerificationError.INVALID_SIGNATURE: "Invalid content signature.",
    VerificationError.PAYLOAD_MISMATCH: "Content signature mismatch.",
}


def get_token_from_request() -> Optional[str]:
    """Extract JWT token from Authorization header.

    Returns:
        Token string or None if not present
    """
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:]
    return None


def failure_response(result: VerificationResult):
    """Render a failed verification as a JSON error response."""
    status = 401 if result.error.is_authentication_failure else 400
    body = {
        "error": ERROR_SUMMARIES[result.error],
        "kind": result.kind,
        "message": result.error_message,
    }
    body.update(result.details)
    return jsonify(body), status


def jwt_required(f):
    """Decorator to require valid JWT token for endpoint.

    Sets g.claims, g.user_id and g.current_user on success.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        result = decode_token(get_token_from_request())
        if not result.success:
            return failure_response(result)

        # Store claims in Flask's g object for access in route
        g.claims = result.value
        g.user_id = result.value.user_id
        g.current_user = result.value.username
        return f(*args, **kwargs)
    return decorated


def content_signature_required(f):
    """Decorator to bind the request body to the token's signed content.

    Must be applied beneath jwt_required so g.claims is populated.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        payload = request.get_json(silent=True)
        result = verify_content(g.claims, payload)
        if not result.success:
            log_event(
                "content_integrity",
                details=f"{result.kind} on {request.method} {request.path}",
                status="error",
                user=g.current_user,
            )
            return failure_response(result)
        return f(*args, **kwargs)
    return decorated
