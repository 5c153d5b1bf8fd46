"""
Ownership-scoped book service.

Every query goes through ``owned_by`` so a caller can only ever see or
touch their own rows.  A book owned by someone else is reported exactly
like a book that does not exist.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import ColumnElement, delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from database.models import Book
from utils.errors import (
    BookNotFoundError,
    ConcurrencyConflictError,
    FieldValidationError,
)

logger = logging.getLogger(__name__)

# ids are 64-bit signed integers in every supported store
MAX_BOOK_ID = 2**63 - 1


def owned_by(user_id: int) -> ColumnElement[bool]:
    """The ownership filter shared by every book query."""
    return Book.user_id == user_id


def _clean_fields(title: str, author: str, description: str) -> dict:
    fields = {"title": title, "author": author, "description": description}
    for name, value in fields.items():
        if value is None or not str(value).strip():
            raise FieldValidationError(f"{name.capitalize()} is required")
    return {name: str(value).strip() for name, value in fields.items()}


class BookService:
    """CRUD over the books of a single, already-authenticated owner."""

    def __init__(self, session: AsyncSession, owner_id: int):
        self.session = session
        self.owner_id = owner_id

    async def _find(self, book_id: int) -> Optional[Book]:
        if not 1 <= book_id <= MAX_BOOK_ID:
            return None
        result = await self.session.execute(
            select(Book).where(Book.id == book_id, owned_by(self.owner_id))
        )
        return result.scalar_one_or_none()

    async def _exists(self, book_id: int) -> bool:
        if not 1 <= book_id <= MAX_BOOK_ID:
            return False
        result = await self.session.execute(
            select(exists().where(Book.id == book_id, owned_by(self.owner_id)))
        )
        return bool(result.scalar())

    async def _raise_for_lost_write(
        self, book_id: int, cause: Optional[Exception] = None
    ) -> None:
        """
        A write matched no row.  Re-check once under the same filter: if
        the book is gone it was deleted concurrently and is simply not
        found, anything else is a genuine conflict.
        """
        await self.session.rollback()
        if not await self._exists(book_id):
            logger.info("Book %s vanished during write (owner %s)", book_id, self.owner_id)
            raise BookNotFoundError() from cause
        logger.error("Write conflict on book %s (owner %s)", book_id, self.owner_id)
        raise ConcurrencyConflictError() from cause

    async def list(self) -> List[Book]:
        result = await self.session.execute(
            select(Book).where(owned_by(self.owner_id)).order_by(Book.id)
        )
        return list(result.scalars().all())

    async def get(self, book_id: int) -> Book:
        book = await self._find(book_id)
        if book is None:
            raise BookNotFoundError()
        return book

    async def create(self, title: str, author: str, description: str) -> Book:
        book = Book(**_clean_fields(title, author, description), user_id=self.owner_id)
        self.session.add(book)
        await self.session.flush()
        logger.info("Created book %s for user %s", book.id, self.owner_id)
        return book

    async def update(
        self, book_id: int, title: str, author: str, description: str
    ) -> Book:
        fields = _clean_fields(title, author, description)
        book = await self._find(book_id)
        if book is None:
            raise BookNotFoundError()

        for name, value in fields.items():
            setattr(book, name, value)

        try:
            await self.session.flush()
        except StaleDataError as exc:
            await self._raise_for_lost_write(book_id, exc)

        logger.info("Updated book %s for user %s", book_id, self.owner_id)
        return book

    async def delete(self, book_id: int) -> None:
        book = await self._find(book_id)
        if book is None:
            raise BookNotFoundError()

        result = await self.session.execute(
            delete(Book)
            .where(Book.id == book.id, owned_by(self.owner_id))
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            await self._raise_for_lost_write(book_id)

        self.session.expunge(book)
        logger.info("Deleted book %s for user %s", book_id, self.owner_id)
