"""
Detached symmetric signatures over byte strings.

Two Signer instances exist per process: one under the auth key (outer
bearer tokens) and one under the content key (inner content envelopes).
Signing uses PyJWT's HMAC implementation, so the inner signature is the
same primitive as the outer token's HS256 signature, just with another key.
"""
import hmac
from functools import lru_cache

from jwt.algorithms import get_default_algorithms
from jwt.utils import base64url_encode

from .config import JWT_ALGORITHM, JWT_SECRET, CONTENT_SECRET

_SYMMETRIC_ALGORITHMS = {"HS256", "HS384", "HS512"}


class Signer:
    """Sign and verify byte strings with one shared-secret key.

    Signatures are deterministic for a given (data, key) pair and are
    returned as unpadded base64url text.
    """

    def __init__(self, key: str | bytes, algorithm: str = "HS256"):
        if algorithm not in _SYMMETRIC_ALGORITHMS:
            raise ValueError(f"Unsupported signing algorithm: {algorithm}")
        if not key:
            raise ValueError("Signing key must not be empty")
        self.algorithm = algorithm
        self._algorithm = get_default_algorithms()[algorithm]
        self._key = self._algorithm.prepare_key(key)

    @property
    def key(self) -> bytes:
        return self._key

    def sign(self, data: bytes) -> str:
        """Return the base64url signature of data."""
        return base64url_encode(self._algorithm.sign(data, self._key)).decode("ascii")

    def verify(self, data: bytes, signature: str) -> bool:
        """Check signature against data; any mismatch or malformed input is False.

        Compares the exact base64url text, so a signature that only differs in
        its unused trailing bits does not verify.
        """
        if not signature or not isinstance(signature, str):
            return False
        try:
            return hmac.compare_digest(self.sign(data).encode("ascii"), signature.encode("ascii"))
        except UnicodeEncodeError:
            return False


@lru_cache(maxsize=1)
def get_auth_signer() -> Signer:
    """Signer for outer bearer tokens."""
    return Signer(JWT_SECRET, JWT_ALGORITHM)


@lru_cache(maxsize=1)
def get_content_signer() -> Signer:
    """Signer for inner content envelopes."""
    return Signer(CONTENT_SECRET, JWT_ALGORITHM)


__all__ = ["Signer", "get_auth_signer", "get_content_signer"]
