"""
User identity management: registration, authentication and lookup.

Handles:
- User registration (uniqueness on username and email, password hashing)
- Credential authentication
- Principal re-hydration for the sign-content step
"""
import logging
from typing import Optional

from core import log_event
from core.errors import AuthenticationError, ConflictError, ValidationError
from webapi.store import User, get_user_store

from .passwords import hash_password, verify_password
from .types import Principal

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Username or password is incorrect"


# =============================================================================
# Registration
# =============================================================================

def register_user(username: str, email: str, password: str) -> User:
    """Create a new user account.

    Args:
        username: Unique login name
        email: Unique email address
        password: Plain text password (hashed before storage)

    Returns:
        The stored User with its assigned id

    Raises:
        ValidationError: a field is missing or empty
        ConflictError: username or email already taken
    """
    if not username or not email or not password:
        raise ValidationError(
            "Missing required fields",
            details={"required": ["username", "email", "password"]},
        )

    users = get_user_store()
    existing = users.find_where(lambda u: u.username == username or u.email == email)
    if existing:
        raise ConflictError("User already exists", message="Username or email is already taken")

    user = users.insert(User(
        id=0,
        username=username,
        email=email,
        password_hash=hash_password(password),
    ))
    logger.info(f"Registered user {username} (id={user.id})")
    log_event("register", details=f"User registered: {username}", user=username)
    return user


# =============================================================================
# Authentication
# =============================================================================

def authenticate_user(username: str, password: str) -> User:
    """Check credentials and return the matching user.

    Unknown usernames and wrong passwords fail identically.

    Raises:
        ValidationError: username or password missing
        AuthenticationError: credentials do not match
    """
    if not username or not password:
        raise ValidationError(
            "Missing credentials",
            details={"required": ["username", "password"]},
        )

    user = get_user_store().find_where(lambda u: u.username == username)
    if user is None or not verify_password(password, user.password_hash):
        logger.warning(f"Failed login attempt for {username}")
        log_event("login", details=f"Login failed: {username}", status="error", user=username)
        raise AuthenticationError("Invalid credentials", message=INVALID_CREDENTIALS_MESSAGE)

    log_event("login", details=f"Login successful: {username}", user=username)
    return user


# =============================================================================
# Lookup
# =============================================================================

def get_user(user_id: int) -> Optional[User]:
    return get_user_store().find(user_id)


def find_principal(user_id: int) -> Optional[Principal]:
    """Re-hydrate the identity behind a token, None if the user is gone."""
    user = get_user(user_id)
    return user.principal if user else None


def get_users_list() -> list[dict]:
    return [u.to_public() for u in get_user_store().list()]
