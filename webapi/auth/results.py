"""
Verification results.

Bearer and content-integrity checks never raise on a failed check: they
return a VerificationResult whose error names the failure kind. The HTTP
layer turns a failed result into a response.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class VerificationError(Enum):
    """Enumeration of possible verification failures."""
    # Outer token (surfaced as 401)
    MISSING_TOKEN = "MissingTokenError"
    MALFORMED_TOKEN = "MalformedTokenError"
    SIGNATURE = "SignatureError"
    EXPIRED_TOKEN = "ExpiredTokenError"
    # Content integrity (surfaced as 400)
    MISSING_SIGNATURE = "MissingSignatureError"
    INVALID_SIGNATURE = "InvalidSignatureError"
    PAYLOAD_MISMATCH = "PayloadMismatchError"

    @property
    def is_authentication_failure(self) -> bool:
        return self in _OUTER_TOKEN_ERRORS


_OUTER_TOKEN_ERRORS = frozenset({
    VerificationError.MISSING_TOKEN,
    VerificationError.MALFORMED_TOKEN,
    VerificationError.SIGNATURE,
    VerificationError.EXPIRED_TOKEN,
})


@dataclass
class VerificationResult(Generic[T]):
    """
    Result of a verification step.

    Attributes:
        success: Whether verification succeeded
        value: Verified value (decoded claims) on success
        error: Failure kind if verification failed
        error_message: Human-readable error message
        details: Structured diagnostics (e.g. both payloads on mismatch)
    """
    success: bool
    value: Optional[T] = None
    error: Optional[VerificationError] = None
    error_message: Optional[str] = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "VerificationResult[T]":
        """Create a successful result."""
        return cls(success=True, value=value)

    @classmethod
    def fail(
        cls,
        error: VerificationError,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ) -> "VerificationResult[T]":
        """Create a failed result."""
        return cls(success=False, error=error, error_message=message, details=details or {})

    @property
    def kind(self) -> Optional[str]:
        return self.error.value if self.error else None
