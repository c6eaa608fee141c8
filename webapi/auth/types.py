"""
Auth domain types - no dependencies on other auth modules.

Claims are a tagged variant: a token decodes to either AuthClaims (plain
login token) or BoundClaims (token bound to a signed payload). Callers
dispatch with isinstance; there are no optional envelope fields to probe.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Union


@dataclass(frozen=True)
class Principal:
    """User identity carried by a token (immutable)."""
    id: int
    username: str
    email: str


@dataclass(frozen=True)
class ContentEnvelope:
    """Canonical payload bytes plus their signature under the content key."""
    canonical_payload: bytes
    inner_signature: str


@dataclass(frozen=True)
class AuthClaims:
    """Decoded claims of a plain bearer token."""
    user_id: int
    username: str
    email: str
    issued_at: datetime
    expires_at: datetime

    @property
    def subject(self) -> int:
        return self.user_id

    @property
    def principal(self) -> Principal:
        return Principal(id=self.user_id, username=self.username, email=self.email)


@dataclass(frozen=True)
class BoundClaims(AuthClaims):
    """Claims of a token produced by the sign-content step."""
    envelope: ContentEnvelope


Claims = Union[AuthClaims, BoundClaims]
