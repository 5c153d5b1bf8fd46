"""
Book REST routes.

Route prefix: /api/books.  The collection routes also answer on
``/api/books/`` since the static client mounted at ``/`` takes the
trailing-slash redirect.  Every route requires a Bearer token and acts
only on the caller's own books.
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_current_user_id
from core.books import BookService
from utils.schemas import BookResponse, BookWrite

logger = logging.getLogger(__name__)

router = APIRouter(tags=["books"])


def book_service(
    session: AsyncSession = Depends(db_session),
    user_id: int = Depends(get_current_user_id),
) -> BookService:
    return BookService(session, owner_id=user_id)


@router.get("", response_model=List[BookResponse])
@router.get("/", response_model=List[BookResponse], include_in_schema=False)
async def list_books(books: BookService = Depends(book_service)):
    return await books.list()


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(book_id: int, books: BookService = Depends(book_service)):
    return await books.get(book_id)


@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
@router.post(
    "/",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_book(
    body: BookWrite,
    response: Response,
    books: BookService = Depends(book_service),
):
    book = await books.create(body.title, body.author, body.description)
    await books.session.commit()
    response.headers["Location"] = f"/api/books/{book.id}"
    return book


@router.put("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_book(
    book_id: int,
    body: BookWrite,
    books: BookService = Depends(book_service),
) -> Response:
    await books.update(book_id, body.title, body.author, body.description)
    await books.session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(
    book_id: int,
    books: BookService = Depends(book_service),
) -> Response:
    await books.delete(book_id)
    await books.session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
