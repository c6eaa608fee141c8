"""
Authentication endpoints: registration, login and content signing.

Login and registration return a plain access token. sign-content trades a
valid token plus the body the caller intends to submit for a content-bound
token accepted by the mutating post endpoints.
"""

import logging

from flask import Blueprint, g, jsonify, request

from core import log_event
from core.errors import NotFoundError, ValidationError
from webapi.auth import (
    EmptyContentError,
    SerializationError,
    authenticate_user,
    create_content_token,
    create_token,
    find_principal,
    is_empty_payload,
    jwt_required,
    register_user,
)
from webapi.schemas import LoginRequest, RegisterRequest, parse_body

logger = logging.getLogger(__name__)

# Create blueprint
auth_bp = Blueprint('auth', __name__, url_prefix='/auth')

SIGNED_TOKEN_INSTRUCTIONS = "Use the signed_token in Authorization header for POST requests"


@auth_bp.route('/register', methods=['POST'])
def register():
    """Create an account and return a plain access token."""
    body = parse_body(RegisterRequest, request.get_json(silent=True))
    user = register_user(body.username, body.email, body.password)

    return jsonify({
        "message": "User registered successfully",
        "user": user.to_public(),
        "token": create_token(user.principal),
    }), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """Authenticate user and return JWT token."""
    body = parse_body(LoginRequest, request.get_json(silent=True))
    user = authenticate_user(body.username, body.password)

    return jsonify({
        "message": "Login successful",
        "user": user.to_public(),
        "token": create_token(user.principal),
    })


@auth_bp.route('/sign-content', methods=['POST'])
@jwt_required
def sign_content():
    """
    Bind the request body to a new token.

    The returned signed_token is valid only for a later request whose body
    is byte-identical (same keys, same order) to the one signed here.
    """
    content = request.get_json(silent=True)
    if is_empty_payload(content):
        raise ValidationError(
            "No content provided",
            message="Content to be signed must be provided in request body",
        )

    principal = find_principal(g.user_id)
    if principal is None:
        raise NotFoundError(
            "User not found",
            message="User associated with token no longer exists",
        )

    try:
        signed_token = create_content_token(principal, content)
    except EmptyContentError as e:
        raise ValidationError("No content provided", message=str(e)) from e
    except SerializationError as e:
        raise ValidationError("Invalid content", message=str(e)) from e

    logger.info(f"Signed content for user_id={principal.id}")
    log_event("sign_content", details=f"Content signed for {principal.username}", user=principal.username)

    return jsonify({
        "message": "Content signed successfully",
        "signed_token": signed_token,
        "signed_content": content,
        "instructions": SIGNED_TOKEN_INSTRUCTIONS,
    })
