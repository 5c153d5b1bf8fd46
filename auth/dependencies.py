"""
FastAPI dependencies for authentication.

Provides ``db_session``, ``token_issuer`` and ``get_current_user``
dependencies that are used across all protected routes.
"""

from __future__ import annotations

from typing import AsyncGenerator, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenClaims, TokenIssuer, get_token_issuer
from database.session import get_db_session
from utils.errors import TokenInvalidError

# auto_error=False so a missing header is a 401 like any other bad token
_bearer_scheme = HTTPBearer(auto_error=False)


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def token_issuer() -> TokenIssuer:
    return get_token_issuer()


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    issuer: TokenIssuer = Depends(token_issuer),
) -> TokenClaims:
    """
    Extract and verify the Bearer token, returning its claims.

    No database lookup happens here; book queries are filtered by
    ``claims.user_id`` afterwards.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise TokenInvalidError("missing bearer token")
    return issuer.validate(credentials.credentials)


async def get_current_user_id(
    claims: TokenClaims = Depends(get_current_user),
) -> int:
    return claims.user_id
