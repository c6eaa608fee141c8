"""
Payload canonicalization for signing and comparison.

The canonical form is compact JSON in the key order the caller submitted:
no key sorting, no whitespace normalization. {"a": 1, "b": 2} and
{"b": 2, "a": 1} therefore canonicalize to different bytes, and a payload
signed in one order only matches a request body sent in the same order.
"""

import json
from typing import Any


class SerializationError(ValueError):
    """Payload contains values that have no JSON representation."""


def canonicalize(payload: Any) -> bytes:
    """Serialize a payload to its canonical UTF-8 bytes.

    Raises:
        SerializationError: payload holds non-JSON values (objects, NaN, Infinity)
    """
    try:
        text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        # Lone surrogates survive json.loads but cannot be encoded
        return text.encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Payload is not serializable: {e}") from e


def decode_canonical(canonical: bytes) -> Any:
    """Parse canonical bytes back into a payload (for diagnostics)."""
    return json.loads(canonical.decode("utf-8"))
