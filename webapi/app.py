"""
Flask Application Factory.

Creates and configures the Flask app with all extensions and blueprints.
"""

import logging
import time
import uuid
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, g, jsonify, request

from config.settings import get_settings
from webapi.store import InMemoryRepository, Post, Repository, User, seed_demo_data

load_dotenv()

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[dict] = None,
    user_store: Optional[Repository[User]] = None,
    post_store: Optional[Repository[Post]] = None,
):
    """Create and configure the Flask application.

    Args:
        config: Optional dict of config overrides (e.g. {'TESTING': True}).
        user_store: User repository; an in-memory one is created if omitted.
        post_store: Post repository; an in-memory one is created if omitted.

    Returns:
        Configured Flask app instance.
    """
    settings = get_settings()

    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = settings.max_content_length
    app.config['SEED_DEMO_DATA'] = settings.seed_demo_data
    # Keep response keys in insertion order
    app.json.sort_keys = False

    if config:
        app.config.update(config)

    # Configure logging
    from webapi.logging_config import configure_logging
    configure_logging(app)

    # Initialize extensions (CORS, limiter)
    from webapi.extensions import init_extensions
    init_extensions(app)

    # Register custom error handlers for APIError hierarchy
    from core.errors import register_error_handlers
    register_error_handlers(app)

    # Resource stores
    _init_stores(app, user_store, post_store)

    # Register blueprints
    _register_blueprints(app)

    # Register middleware
    _register_middleware(app)

    # Register global error handlers
    _register_error_handlers(app)

    return app


def _init_stores(app, user_store, post_store):
    """Attach repositories to the app, seeding fresh in-memory ones."""
    fresh = user_store is None and post_store is None
    app.extensions['user_store'] = user_store if user_store is not None else InMemoryRepository()
    app.extensions['post_store'] = post_store if post_store is not None else InMemoryRepository()

    if fresh and app.config.get('SEED_DEMO_DATA', True):
        seed_demo_data(app.extensions['user_store'], app.extensions['post_store'])


def _register_blueprints(app):
    """Register all route blueprints."""
    from webapi.routes import auth_bp, info_bp, posts_bp, users_bp

    app.register_blueprint(info_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(posts_bp)
    app.register_blueprint(users_bp)

    # Apply auth rate limit
    from webapi.extensions import limiter
    limiter.limit(get_settings().rate_limit.auth)(auth_bp)


def _register_middleware(app):
    """Register request tracking and security middleware."""

    @app.before_request
    def before_request_tracking():
        """Track request start and assign request ID."""
        g.request_id = request.headers.get('X-Request-ID', str(uuid.uuid4())[:8])
        g.start_time = time.time()

    @app.after_request
    def after_request_tracking(response):
        """Log request completion with timing and add security headers."""
        duration_ms = 0
        if hasattr(g, 'start_time'):
            duration_ms = (time.time() - g.start_time) * 1000

        if hasattr(g, 'request_id'):
            response.headers['X-Request-ID'] = g.request_id

        log_level = logging.WARNING if response.status_code >= 400 else logging.INFO

        logger.log(
            log_level,
            f"{request.method} {request.path} -> {response.status_code} ({duration_ms:.1f}ms)",
            extra={
                'request_id': getattr(g, 'request_id', 'unknown'),
                'method': request.method,
                'endpoint': request.path,
                'status_code': response.status_code,
                'duration_ms': round(duration_ms, 2),
                'remote_addr': request.remote_addr,
                'user': getattr(g, 'current_user', None),
            }
        )

        # Security headers
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        response.headers['Content-Security-Policy'] = "default-src 'self'"
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        return response


def _register_error_handlers(app):
    """Register global exception handler."""
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(Exception)
    def handle_exception(e):
        # HTTP errors without a dedicated handler keep their status
        if isinstance(e, HTTPException):
            return e
        logger.exception(
            f"Unhandled exception: {str(e)}",
            extra={
                'request_id': getattr(g, 'request_id', 'unknown'),
                'method': request.method,
                'endpoint': request.path,
                'remote_addr': request.remote_addr,
            }
        )
        return jsonify({
            'error': 'Internal server error',
            'request_id': getattr(g, 'request_id', 'unknown'),
        }), 500
