"""
Flask extension instances.

Centralized extension objects initialized via init_extensions(app).
Import these objects in blueprints instead of creating new instances.
"""

import logging

from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from config.settings import get_settings
from core import log_event
from core.errors import RateLimitError, api_error_response

logger = logging.getLogger(__name__)

# Extension instances (uninitialized until init_extensions is called)
limiter = None  # Created in init_extensions with full config

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


def init_extensions(app):
    """Initialize all Flask extensions with the app instance.

    Args:
        app: Flask application instance
    """
    settings = get_settings()

    # CORS
    CORS(app, origins=settings.allowed_origins)

    # Rate limiter - must be created with all config, then assigned to module-level
    global limiter
    limiter = Limiter(
        app=app,
        key_func=get_remote_address,
        default_limits=[settings.rate_limit.default],
        storage_uri=settings.rate_limit.storage,
        strategy="moving-window",
    )

    @app.errorhandler(429)
    def ratelimit_handler(e):
        log_event("rate_limit", details=f"Rate limit exceeded: {e.description}", status="warning")
        return api_error_response(RateLimitError(
            RATE_LIMIT_MESSAGE,
            message=str(e.description),
            details={"retry_after": e.get_response().headers.get("Retry-After", 60)},
        ))

    return limiter
