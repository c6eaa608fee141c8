"""
Password hashing and verification (werkzeug).
"""
from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(password: str) -> str:
    """Hash a password with werkzeug's default salted scheme.

    Args:
        password: Plain text password

    Returns:
        Salted hash string, safe to store
    """
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash.

    Args:
        password: Plain text password
        password_hash: Hash to check against

    Returns:
        True if password matches, False otherwise
    """
    return check_password_hash(password_hash, password)
