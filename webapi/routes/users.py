"""
User endpoints (authentication required).
"""

from flask import Blueprint, g, jsonify

from core.errors import NotFoundError
from webapi.auth import get_user, get_users_list, jwt_required

# Create blueprint
users_bp = Blueprint('users', __name__, url_prefix='/api/users')


@users_bp.route('', methods=['GET'])
@jwt_required
def list_users():
    users = get_users_list()
    return jsonify({
        "message": "Users retrieved successfully",
        "count": len(users),
        "users": users,
    })


@users_bp.route('/me', methods=['GET'])
@jwt_required
def current_user_profile():
    """Profile of the user the bearer token was issued to."""
    user = get_user(g.user_id)
    if user is None:
        raise NotFoundError(
            "User not found",
            message="User associated with token no longer exists",
        )
    return jsonify({
        "message": "User profile retrieved successfully",
        "user": user.to_public(),
    })
