"""
Pydantic schemas for request validation.

These schemas provide centralized validation with clear error messages,
replacing scattered manual validation throughout route handlers.
"""

from webapi.schemas.common import parse_body
from webapi.schemas.auth import (
    LoginRequest,
    RegisterRequest,
)
from webapi.schemas.posts import PostRequest

__all__ = [
    # Common
    "parse_body",
    # Auth
    "LoginRequest",
    "RegisterRequest",
    # Posts
    "PostRequest",
]
