"""
Auth configuration constants - no dependencies on other auth modules.

All auth configuration is centralized here for easy auditing.
Values are sourced from config.settings (Pydantic BaseSettings).
"""
from datetime import timedelta

from config.settings import get_settings

_settings = get_settings()
_auth = _settings.auth

# =============================================================================
# Token Signing Configuration
# =============================================================================

# Outer bearer token key
JWT_SECRET = _auth.jwt_secret.get_secret_value()
# Inner content envelope key (independent of JWT_SECRET)
CONTENT_SECRET = _auth.content_secret.get_secret_value()
JWT_ALGORITHM = _auth.jwt_algorithm

# Same TTL for plain and content-bound tokens
JWT_EXPIRATION_HOURS = _auth.jwt_expiration_hours
TOKEN_TTL = timedelta(hours=JWT_EXPIRATION_HOURS)

# =============================================================================
# Token Claim Names
# =============================================================================

CLAIM_USER_ID = "user_id"
CLAIM_USERNAME = "username"
CLAIM_EMAIL = "email"
CLAIM_SIGNED_CONTENT = "signed_content"
CLAIM_CONTENT_SIGNATURE = "content_signature"

REQUIRED_CLAIMS = ["sub", "iat", "exp", CLAIM_USER_ID]
