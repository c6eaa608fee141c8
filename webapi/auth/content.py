"""
Content integrity verification for mutating requests.

A mutating request is accepted only if its bearer token is content-bound
and the live request body canonicalizes to exactly the bytes that were
signed. Comparison is byte-exact over the non-normalizing canonical form,
so a body with the same fields in a different order is a mismatch.
"""
import logging
from functools import lru_cache
from typing import Any

from .canonical import SerializationError, canonicalize, decode_canonical
from .results import VerificationError, VerificationResult
from .signer import Signer, get_content_signer
from .types import BoundClaims, Claims

logger = logging.getLogger(__name__)

SIGN_CONTENT_HINT = "Use the /auth/sign-content endpoint to get a token with content signature"


class ContentIntegrityVerifier:
    """Check a bound token's envelope against the content key and the live payload."""

    def __init__(self, content_signer: Signer):
        self._content_signer = content_signer

    def verify(self, claims: Claims, request_payload: Any) -> VerificationResult[None]:
        if not isinstance(claims, BoundClaims):
            return VerificationResult.fail(
                VerificationError.MISSING_SIGNATURE,
                "JWT token must contain signed content for data integrity verification.",
                details={"how_to_fix": SIGN_CONTENT_HINT},
            )

        envelope = claims.envelope
        if not self._content_signer.verify(envelope.canonical_payload, envelope.inner_signature):
            return VerificationResult.fail(
                VerificationError.INVALID_SIGNATURE,
                "Content signature does not match signed content",
            )

        try:
            live = canonicalize(request_payload)
        except SerializationError as e:
            return VerificationResult.fail(VerificationError.PAYLOAD_MISMATCH, str(e))

        if live != envelope.canonical_payload:
            logger.info(f"Payload mismatch for user_id={claims.user_id}")
            return VerificationResult.fail(
                VerificationError.PAYLOAD_MISMATCH,
                "Submitted content does not match signed content.",
                details={
                    "submitted_content": request_payload,
                    "signed_content": decode_canonical(envelope.canonical_payload),
                },
            )

        return VerificationResult.ok()


@lru_cache(maxsize=1)
def get_content_verifier() -> ContentIntegrityVerifier:
    return ContentIntegrityVerifier(get_content_signer())


def verify_content(claims: Claims, request_payload: Any) -> VerificationResult[None]:
    """Verify a request payload against claims with the process content key."""
    return get_content_verifier().verify(claims, request_payload)
