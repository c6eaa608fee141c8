"""
Authentication request schemas.
"""

from typing import ClassVar

from pydantic import Field, field_validator

from webapi.schemas.common import RequestSchema


class RegisterRequest(RequestSchema):
    """New account registration request."""
    username: str = Field(..., min_length=1, max_length=100, description="Username")
    email: str = Field(..., min_length=1, max_length=254, description="Email address")
    password: str = Field(..., min_length=1, max_length=200, description="Password")

    @field_validator('username', 'email')
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Must not be blank")
        return v


class LoginRequest(RequestSchema):
    """User login request."""
    missing_error: ClassVar[str] = "Missing credentials"

    username: str = Field(..., min_length=1, max_length=100, description="Username")
    password: str = Field(..., min_length=1, max_length=200, description="Password")

    @field_validator('username')
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Must not be blank")
        return v
