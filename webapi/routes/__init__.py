"""
Route blueprints for the API.
"""

from .info import info_bp
from .auth_routes import auth_bp
from .posts import posts_bp
from .users import users_bp

__all__ = ['info_bp', 'auth_bp', 'posts_bp', 'users_bp']
