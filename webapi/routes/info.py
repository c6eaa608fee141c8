"""
Public welcome and API documentation endpoints.
"""

from flask import Blueprint, jsonify

from core.timestamps import isonow

info_bp = Blueprint('info', __name__)

API_NAME = "Secure RESTful API"
API_VERSION = "1.0.0"

ENDPOINTS = {
    "authentication": [
        "POST /auth/register - Register new user",
        "POST /auth/login - User login",
        "POST /auth/sign-content - Sign content for secure POST operations",
    ],
    "posts": [
        "GET /api/posts - Get all posts (public)",
        "GET /api/posts/<id> - Get specific post (public)",
        "POST /api/posts - Create post (secured with content signature)",
        "PUT /api/posts/<id> - Update post (secured with content signature)",
        "DELETE /api/posts/<id> - Delete post (authentication required)",
    ],
    "users": [
        "GET /api/users - Get all users (authentication required)",
        "GET /api/users/me - Get current user profile (authentication required)",
    ],
}


@info_bp.route('/', methods=['GET'])
def welcome():
    return jsonify({
        "message": "Welcome to the Secure RESTful API!",
        "documentation": "/api/info",
        "health": "OK",
        "timestamp": isonow(),
    })


@info_bp.route('/api/info', methods=['GET'])
def api_info():
    return jsonify({
        "name": API_NAME,
        "version": API_VERSION,
        "description": "Full RESTful API with JWT-based security",
        "security": {
            "authentication": "JWT Bearer tokens",
            "post_security": "Signed JWT tokens with content verification",
            "features": [
                "Rate limiting",
                "CORS enabled",
                "Security headers",
                "Password hashing (werkzeug)",
                "Content signature verification for POST operations",
            ],
        },
        "endpoints": ENDPOINTS,
        "usage": {
            "basic_auth": 'Include "Authorization: Bearer <token>" header',
            "secure_post": [
                "1. Login to get authentication token",
                "2. Call /auth/sign-content with your POST data to get signed token",
                "3. Use signed token for POST/PUT operations",
            ],
        },
    })
