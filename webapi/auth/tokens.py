"""
Bearer token issuance and verification.

Handles:
- Plain access tokens (identity claims only), issued at login/registration
- Content-bound tokens (identity claims plus a signed content envelope),
  issued by the sign-content step
- Outer token verification: presence, structure, signature, expiry

Tokens are JWTs (HS256 under the auth key). A bound token carries two extra
claims: signed_content (the canonical payload text) and content_signature
(its signature under the content key). Bound tokens are not single-use:
one stays valid for its payload until it expires.
"""
import logging
from datetime import datetime, timedelta
from functools import lru_cache
from typing import Any, Callable, Optional

import jwt

from core.timestamps import from_epoch, now, to_epoch

from .canonical import canonicalize
from .config import (
    CLAIM_CONTENT_SIGNATURE,
    CLAIM_EMAIL,
    CLAIM_SIGNED_CONTENT,
    CLAIM_USER_ID,
    CLAIM_USERNAME,
    REQUIRED_CLAIMS,
    TOKEN_TTL,
)
from .results import VerificationError, VerificationResult
from .signer import Signer, get_auth_signer, get_content_signer
from .types import AuthClaims, BoundClaims, Claims, ContentEnvelope, Principal

logger = logging.getLogger(__name__)


class EmptyContentError(ValueError):
    """sign-content was called without a payload."""


def is_empty_payload(payload: Any) -> bool:
    """None, {}, [] and "" cannot be signed."""
    if payload is None:
        return True
    if isinstance(payload, (dict, list, str)):
        return len(payload) == 0
    return False


# =============================================================================
# Token Creation
# =============================================================================

class TokenIssuer:
    """Build signed outer tokens, optionally embedding a content envelope."""

    def __init__(
        self,
        auth_signer: Signer,
        content_signer: Signer,
        ttl: timedelta = TOKEN_TTL,
        clock: Callable[[], datetime] = now,
    ):
        self._auth_signer = auth_signer
        self._content_signer = content_signer
        self._ttl = ttl
        self._clock = clock

    def _identity_claims(self, principal: Principal) -> dict:
        issued_at = self._clock()
        return {
            "sub": str(principal.id),
            CLAIM_USER_ID: principal.id,
            CLAIM_USERNAME: principal.username,
            CLAIM_EMAIL: principal.email,
            "iat": to_epoch(issued_at),
            "exp": to_epoch(issued_at + self._ttl),
        }

    def _encode(self, claims: dict) -> str:
        return jwt.encode(claims, self._auth_signer.key, algorithm=self._auth_signer.algorithm)

    def issue_auth_token(self, principal: Principal) -> str:
        """Create a plain access token for principal.

        Args:
            principal: Authenticated user identity

        Returns:
            Encoded JWT carrying AuthClaims
        """
        return self._encode(self._identity_claims(principal))

    def issue_bound_token(self, principal: Principal, payload: Any) -> str:
        """Create a token bound to payload.

        The payload is canonicalized, signed with the content key, and both
        the canonical text and its signature are embedded in the claims
        before the whole token is signed with the auth key.

        Raises:
            EmptyContentError: payload is empty
            SerializationError: payload cannot be canonicalized
        """
        if is_empty_payload(payload):
            raise EmptyContentError("Content to be signed must be provided in request body")

        canonical = canonicalize(payload)
        claims = self._identity_claims(principal)
        claims[CLAIM_SIGNED_CONTENT] = canonical.decode("utf-8")
        claims[CLAIM_CONTENT_SIGNATURE] = self._content_signer.sign(canonical)
        return self._encode(claims)


# =============================================================================
# Token Decoding/Validation
# =============================================================================

def _claims_from_payload(payload: dict) -> Claims:
    """Map a decoded JWT payload onto the claims variant it represents."""
    base = dict(
        user_id=int(payload[CLAIM_USER_ID]),
        username=str(payload.get(CLAIM_USERNAME, "")),
        email=str(payload.get(CLAIM_EMAIL, "")),
        issued_at=from_epoch(int(payload["iat"])),
        expires_at=from_epoch(int(payload["exp"])),
    )

    signed_content = payload.get(CLAIM_SIGNED_CONTENT)
    signature = payload.get(CLAIM_CONTENT_SIGNATURE)
    if isinstance(signed_content, str) and isinstance(signature, str):
        envelope = ContentEnvelope(
            canonical_payload=signed_content.encode("utf-8"),
            inner_signature=signature,
        )
        return BoundClaims(envelope=envelope, **base)

    return AuthClaims(**base)


class BearerVerifier:
    """Authenticate an outer token against the auth key and its expiry.

    Checks run in a fixed order: missing, segment count, signature over the
    raw segments, claim structure, expiry. Any altered bit in a three-segment
    token therefore reports a signature failure.
    The content envelope, if any, is returned untouched.
    """

    def __init__(self, auth_signer: Signer):
        self._auth_signer = auth_signer

    def verify(self, token: Optional[str]) -> VerificationResult[Claims]:
        if not token:
            return VerificationResult.fail(
                VerificationError.MISSING_TOKEN,
                "Authorization header must contain a Bearer token",
            )

        # Signature over the raw segments, ahead of PyJWT header parsing
        segments = token.split(".")
        if len(segments) != 3:
            return VerificationResult.fail(
                VerificationError.MALFORMED_TOKEN, "Token must have three segments"
            )
        signing_input, _, signature = token.rpartition(".")
        try:
            signing_bytes = signing_input.encode("ascii")
        except UnicodeEncodeError:
            signing_bytes = None
        if signing_bytes is None or not self._auth_signer.verify(signing_bytes, signature):
            return VerificationResult.fail(
                VerificationError.SIGNATURE, "Token signature verification failed"
            )

        try:
            payload = jwt.decode(
                token,
                self._auth_signer.key,
                algorithms=[self._auth_signer.algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.InvalidSignatureError:
            return VerificationResult.fail(
                VerificationError.SIGNATURE, "Token signature verification failed"
            )
        except jwt.ExpiredSignatureError:
            return VerificationResult.fail(
                VerificationError.EXPIRED_TOKEN, "Token has expired"
            )
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected malformed token: {e}")
            return VerificationResult.fail(
                VerificationError.MALFORMED_TOKEN, f"Token could not be parsed: {e}"
            )

        try:
            claims = _claims_from_payload(payload)
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            return VerificationResult.fail(
                VerificationError.MALFORMED_TOKEN, f"Token claims are invalid: {e}"
            )

        return VerificationResult.ok(claims)


# =============================================================================
# Process-wide instances (keys are fixed at startup)
# =============================================================================

@lru_cache(maxsize=1)
def get_token_issuer() -> TokenIssuer:
    return TokenIssuer(get_auth_signer(), get_content_signer())


@lru_cache(maxsize=1)
def get_bearer_verifier() -> BearerVerifier:
    return BearerVerifier(get_auth_signer())


def create_token(principal: Principal) -> str:
    """Create a plain access token (login, registration)."""
    return get_token_issuer().issue_auth_token(principal)


def create_content_token(principal: Principal, payload: Any) -> str:
    """Create a token bound to payload (sign-content)."""
    return get_token_issuer().issue_bound_token(principal, payload)


def decode_token(token: Optional[str]) -> VerificationResult[Claims]:
    """Verify an outer token with the process auth key."""
    return get_bearer_verifier().verify(token)
