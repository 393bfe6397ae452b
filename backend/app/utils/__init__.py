"""Utilities package."""

from app.utils.helpers import (
    generate_order_number,
    generate_session_token,
    generate_uuid,
    hash_password,
    utcnow,
    verify_password,
)
from app.utils.logger import setup_logging

__all__ = [
    "setup_logging",
    "generate_uuid",
    "generate_order_number",
    "generate_session_token",
    "hash_password",
    "verify_password",
    "utcnow",
]
