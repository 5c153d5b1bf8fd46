"""
Database helper functions — credential-store lookups.

All comparisons are exact matches; the unique indexes on ``users`` use
the same semantics.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User

logger = logging.getLogger(__name__)


async def get_user_by_username(session: AsyncSession, username: str) -> Optional[User]:
    result = await session.execute(
        select(User).where(User.username == username)
    )
    return result.scalar_one_or_none()


async def username_exists(session: AsyncSession, username: str) -> bool:
    result = await session.execute(
        select(exists().where(User.username == username))
    )
    return bool(result.scalar())


async def email_exists(session: AsyncSession, email: str) -> bool:
    result = await session.execute(
        select(exists().where(User.email == email))
    )
    return bool(result.scalar())


async def create_user(
    session: AsyncSession,
    username: str,
    email: str,
    password_hash: str,
) -> User:
    """Insert a ``User`` row and flush so its id is populated."""
    user = User(username=username, email=email, password_hash=password_hash)
    session.add(user)
    await session.flush()
    logger.debug("Inserted user row id=%s", user.id)
    return user
