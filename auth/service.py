"""
Registration and login orchestration.

Both operations are stateless: they read/write the credential store and
mint a fresh token.  Errors are raised from ``utils.errors`` and mapped
to HTTP responses by ``api.middleware``.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenIssuer
from auth.password import MAX_PASSWORD_BYTES, hash_password, verify_password
from database.helpers import (
    create_user,
    email_exists,
    get_user_by_username,
    username_exists,
)
from database.models import User
from utils.errors import (
    DuplicateEmailError,
    DuplicateUsernameError,
    FieldValidationError,
    InvalidCredentialsError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    user: User
    token: str
    expires_at: datetime

    def public_profile(self) -> dict:
        """Everything a client may see — never the password hash."""
        return {
            "token": self.token,
            "username": self.user.username,
            "email": self.user.email,
            "expires_at": self.expires_at,
        }


async def _check_unique(session: AsyncSession, username: str, email: str) -> None:
    if await username_exists(session, username):
        raise DuplicateUsernameError()
    if await email_exists(session, email):
        raise DuplicateEmailError()


async def register_user(
    session: AsyncSession,
    username: str,
    email: str,
    password: str,
    issuer: TokenIssuer,
) -> AuthResult:
    """
    Create a user and issue their first token.

    Uniqueness is checked before any write.  A concurrent registration
    can still win the race between the check and the insert; the unique
    indexes then reject ours and the checks are re-run to report which
    field collided.
    """
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise FieldValidationError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
        )

    await _check_unique(session, username, email)

    # bcrypt is CPU-bound; keep it off the event loop
    password_hash = await asyncio.to_thread(hash_password, password)

    try:
        user = await create_user(session, username, email, password_hash)
    except IntegrityError:
        await session.rollback()
        await _check_unique(session, username, email)
        raise

    issued = issuer.issue(user.id, user.username, user.email)
    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return AuthResult(user=user, token=issued.token, expires_at=issued.expires_at)


async def authenticate_user(
    session: AsyncSession,
    username: str,
    password: str,
    issuer: TokenIssuer,
) -> AuthResult:
    """Check credentials and issue a new token on every success."""
    user = await get_user_by_username(session, username)

    if user is None or not await asyncio.to_thread(
        verify_password, password, user.password_hash
    ):
        logger.info("Failed login for username %r", username)
        raise InvalidCredentialsError()

    issued = issuer.issue(user.id, user.username, user.email)
    logger.info("Login: %s (id=%s)", user.username, user.id)
    return AuthResult(user=user, token=issued.token, expires_at=issued.expires_at)
