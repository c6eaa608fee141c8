"""Shared pytest fixtures for API and ledger tests."""
import os
from datetime import timedelta

import pytest

# ---------------------------------------------------------------------------
# Deterministic test environment - set BEFORE any webapi module imports.
# webapi.auth.config reads the signing secrets once at import time, so they
# must be in place before the first test module is collected.
# ---------------------------------------------------------------------------
os.environ.setdefault('TESTING', 'true')
os.environ.setdefault('JWT_SECRET', 'test-jwt-secret-for-pytest-32chars!')
os.environ.setdefault('CONTENT_SECRET', 'test-content-secret-for-pytest-32ch')
os.environ.setdefault('LOG_LEVEL', 'WARNING')
os.environ.setdefault('LOG_FORMAT', 'text')

# Keys for protocol tests that build their own issuer/verifiers
AUTH_KEY = b"unit-auth-key-0123456789abcdef0123456789"
CONTENT_KEY = b"unit-content-key-0123456789abcdef01234567"
OTHER_KEY = b"unit-other-key-0123456789abcdef0123456789"


# =============================================================================
# Protocol Fixtures
# =============================================================================

@pytest.fixture
def auth_signer():
    from webapi.auth.signer import Signer
    return Signer(AUTH_KEY)


@pytest.fixture
def content_signer():
    from webapi.auth.signer import Signer
    return Signer(CONTENT_KEY)


@pytest.fixture
def issuer(auth_signer, content_signer):
    from webapi.auth.tokens import TokenIssuer
    return TokenIssuer(auth_signer, content_signer, ttl=timedelta(hours=1))


@pytest.fixture
def bearer(auth_signer):
    from webapi.auth.tokens import BearerVerifier
    return BearerVerifier(auth_signer)


@pytest.fixture
def content_verifier(content_signer):
    from webapi.auth.content import ContentIntegrityVerifier
    return ContentIntegrityVerifier(content_signer)


@pytest.fixture
def principal():
    from webapi.auth.types import Principal
    return Principal(id=7, username="alice", email="alice@example.com")


# =============================================================================
# Flask Fixtures
# =============================================================================

@pytest.fixture
def app():
    """Create Flask app for testing via the application factory.

    Each app gets fresh in-memory stores seeded with the demo admin user.
    """
    from core import clear_event_log
    from webapi.app import create_app

    flask_app = create_app(config={
        'TESTING': True,
        'RATELIMIT_ENABLED': False,
    })
    clear_event_log()
    yield flask_app
    clear_event_log()


@pytest.fixture
def client(app):
    """Create Flask test client."""
    return app.test_client()


def login(client, username='admin', password='password123'):
    """Log in and return the plain access token."""
    response = client.post('/auth/login', json={
        'username': username,
        'password': password,
    })
    assert response.status_code == 200, response.get_json()
    return response.get_json()['token']


def bearer_headers(token):
    return {'Authorization': f'Bearer {token}'}


def sign_content(client, token, payload):
    """Run the sign-content step and return the content-bound token."""
    response = client.post('/auth/sign-content', json=payload, headers=bearer_headers(token))
    assert response.status_code == 200, response.get_json()
    return response.get_json()['signed_token']


@pytest.fixture
def admin_token(client):
    return login(client)


@pytest.fixture
def auth_headers(admin_token):
    """Valid plain-token auth headers for the demo admin user."""
    return bearer_headers(admin_token)
