"""Utility helper functions."""

import hashlib
import hmac
import secrets
import time
import uuid
from datetime import UTC, datetime

_BASE36_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_ORDER_TOKEN_LENGTH = 9


def generate_uuid() -> str:
    """Generate a unique UUID."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Get the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def generate_order_number() -> str:
    """Generate a human-readable order number.

    Format is ``ORD-<epoch milliseconds>-<9 uppercase base36 chars>``.
    Uniqueness is probabilistic; the orders collection enforces it.
    """
    timestamp = int(time.time() * 1000)
    token = "".join(secrets.choice(_BASE36_ALPHABET) for _ in range(_ORDER_TOKEN_LENGTH))
    return f"ORD-{timestamp}-{token}"


def generate_session_token() -> str:
    """Generate an opaque bearer token."""
    return secrets.token_urlsafe(32)


def hash_password(password: str, iterations: int = 260_000) -> str:
    """Hash a password with salted PBKDF2-SHA256.

    Returns ``pbkdf2_sha256$<iterations>$<salt>$<hex digest>``.
    """
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), iterations)
    return f"pbkdf2_sha256${iterations}${salt}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a hash produced by hash_password."""
    try:
        algorithm, iterations, salt, expected = password_hash.split("$")
    except ValueError:
        return False
    if algorithm != "pbkdf2_sha256":
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), int(iterations))
    return hmac.compare_digest(digest.hex(), expected)
