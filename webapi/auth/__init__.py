"""
API authentication module.

Public API:
- Decorators: jwt_required, content_signature_required
- Tokens: create_token, create_content_token, decode_token
- Content integrity: verify_content, canonicalize
- Identity: register_user, authenticate_user, find_principal

Internal modules should import from submodules directly.
External callers should use this facade.

Import Rules:
- External callers: Use `from webapi.auth import X` (this facade)
- Internal auth modules: Use `from .submodule import X` (direct imports)
- Ban: `from webapi.auth import X` inside auth submodules (causes facade import)
"""

# =============================================================================
# Decorators (most commonly used)
# =============================================================================
from .decorators import (
    jwt_required,
    content_signature_required,
    get_token_from_request,
)

# =============================================================================
# Tokens
# =============================================================================
from .tokens import (
    BearerVerifier,
    EmptyContentError,
    TokenIssuer,
    create_content_token,
    create_token,
    decode_token,
    is_empty_payload,
)

# =============================================================================
# Content integrity
# =============================================================================
from .canonical import SerializationError, canonicalize
from .content import ContentIntegrityVerifier, verify_content
from .results import VerificationError, VerificationResult
from .signer import Signer
from .types import AuthClaims, BoundClaims, ContentEnvelope, Principal

# =============================================================================
# Identity
# =============================================================================
from .identity import (
    authenticate_user,
    find_principal,
    get_user,
    get_users_list,
    register_user,
)

__all__ = [
    # Decorators
    "jwt_required",
    "content_signature_required",
    "get_token_from_request",
    # Tokens
    "BearerVerifier",
    "EmptyContentError",
    "TokenIssuer",
    "create_content_token",
    "create_token",
    "decode_token",
    "is_empty_payload",
    # Content integrity
    "SerializationError",
    "canonicalize",
    "ContentIntegrityVerifier",
    "verify_content",
    "VerificationError",
    "VerificationResult",
    "Signer",
    "AuthClaims",
    "BoundClaims",
    "ContentEnvelope",
    "Principal",
    # Identity
    "authenticate_user",
    "find_principal",
    "get_user",
    "get_users_list",
    "register_user",
]
