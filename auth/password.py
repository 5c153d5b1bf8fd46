"""
Password hashing and verification.

bcrypt embeds algorithm, cost and salt in the hash string, so a stored
hash is self-contained and every call to ``hash_password`` draws a fresh
salt.
"""

from __future__ import annotations

from typing import Optional

import bcrypt

from config.settings import config

# bcrypt only looks at the first 72 bytes of input.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt (auto-salted, ``config.bcrypt_rounds`` cost)."""
    raw = password.encode()
    if len(raw) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password longer than {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=rounds or config.bcrypt_rounds)
    return bcrypt.hashpw(raw, salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError):
        return False
