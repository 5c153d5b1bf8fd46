"""
Pydantic request / response schemas for the HTTP API.

JSON keys are camelCase on the wire; request bodies accept snake_case too.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class _ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class RegisterRequest(_ApiModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(_ApiModel):
    username: str
    password: str


class AuthResponse(_ApiModel):
    token: str
    username: str
    email: str
    expires_at: datetime


# ═══════════════════════════════════════════════════════════════════════════════
# Books
# ═══════════════════════════════════════════════════════════════════════════════


class BookWrite(_ApiModel):
    """
    Body for create and update.

    Unknown keys (``userId``, ``id``) are ignored, so a client cannot
    pick the owner of a book.
    """

    title: str = Field(..., min_length=1, max_length=255)
    author: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)


class BookResponse(_ApiModel):
    id: int
    title: str
    author: str
    description: str
    user_id: int
