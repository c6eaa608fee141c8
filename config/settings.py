"""
Central configuration using Pydantic BaseSettings.

Validates all env vars at startup (fail-fast). The two signing secrets
refuse to start outside TESTING mode but get fixed defaults in tests.

Usage:
    from config.settings import get_settings

    settings = get_settings()
    print(settings.auth.jwt_secret.get_secret_value())

Lazy initialization: get_settings() creates the singleton on first call.
Tests can reset via get_settings.cache_clear().
"""

import os
from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings

# Used only when TESTING is set and the real secrets are absent
_TEST_JWT_SECRET = "test-jwt-secret-for-pytest-32chars!"
_TEST_CONTENT_SECRET = "test-content-secret-for-pytest-32ch"


def _is_testing() -> bool:
    """Check if running in test mode."""
    return (
        os.getenv("TESTING", "").lower() in ("true", "1")
        or os.getenv("FLASK_ENV", "") == "testing"
    )


# =============================================================================
# Nested Settings Groups
# =============================================================================


class AuthSettings(BaseSettings):
    """Token signing configuration.

    jwt_secret signs the outer bearer token; content_secret signs the
    inner content envelope. They must be different keys.
    """

    model_config = {"env_prefix": "", "extra": "ignore"}

    jwt_secret: SecretStr = SecretStr("")
    content_secret: SecretStr = SecretStr("")
    jwt_algorithm: str = "HS256"
    jwt_expiration_hours: int = 24


class RateLimitSettings(BaseSettings):
    """Rate limiting configuration."""

    model_config = {"env_prefix": "RATE_LIMIT_", "extra": "ignore"}

    default: str = "100 per 15 minutes"
    auth: str = "20 per minute"
    storage: str = "memory://"


class LedgerSettings(BaseSettings):
    """Ledger simulator configuration."""

    model_config = {"env_prefix": "LEDGER_", "extra": "ignore"}

    bank_name: str = "Digital Bank"
    first_account_number: int = 1000


# =============================================================================
# Root Settings
# =============================================================================


class AppSettings(BaseSettings):
    """Root application settings composing all sub-settings."""

    model_config = {"env_prefix": "", "extra": "ignore", "env_file": ".env", "env_file_encoding": "utf-8"}

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"
    log_file: str = ""

    # Server
    port: int = 3000
    cors_origins: str = "*"
    max_content_length: int = 10 * 1024 * 1024  # 10MB, same as the JSON body limit
    seed_demo_data: bool = True

    # Nested groups (initialized separately to support env_prefix)
    auth: AuthSettings = None  # type: ignore[assignment]
    rate_limit: RateLimitSettings = None  # type: ignore[assignment]

    @model_validator(mode="before")
    @classmethod
    def _init_nested(cls, values):
        """Initialize nested settings from environment."""
        if values.get("auth") is None:
            values["auth"] = AuthSettings()
        if values.get("rate_limit") is None:
            values["rate_limit"] = RateLimitSettings()
        return values

    @model_validator(mode="after")
    def _validate_required_secrets(self):
        """Require two distinct signing secrets; TESTING gets fixed ones."""
        jwt_secret = self.auth.jwt_secret.get_secret_value()
        content_secret = self.auth.content_secret.get_secret_value()

        if _is_testing():
            if not jwt_secret:
                self.auth.jwt_secret = SecretStr(_TEST_JWT_SECRET)
            if not content_secret:
                self.auth.content_secret = SecretStr(_TEST_CONTENT_SECRET)
            return self

        missing = [
            name for name, value in (("JWT_SECRET", jwt_secret), ("CONTENT_SECRET", content_secret))
            if not value
        ]
        if missing:
            raise ValueError(
                f"{' and '.join(missing)} env var(s) required. "
                "Generate one with: python -c \"import secrets; print(secrets.token_hex(32))\""
            )

        if jwt_secret == content_secret:
            raise ValueError("JWT_SECRET and CONTENT_SECRET must be different keys")

        return self

    @property
    def allowed_origins(self) -> list[str] | str:
        """CORS origins as a list, or "*" for any origin."""
        if self.cors_origins.strip() == "*":
            return "*"
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """
    Get the application settings singleton.

    Lazy-initialized on first call. Validates all env vars (fail-fast).
    Tests can reset via: get_settings.cache_clear()
    """
    return AppSettings()


@lru_cache(maxsize=1)
def get_ledger_settings() -> LedgerSettings:
    """Ledger settings on their own, so the CLI does not need API secrets."""
    return LedgerSettings()
