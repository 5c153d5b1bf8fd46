"""
Auth API routes — register, login.

Route prefix: /api/auth
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, token_issuer
from auth.jwt import TokenIssuer
from auth.service import authenticate_user, register_user
from utils.schemas import AuthResponse, LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=AuthResponse)
async def register(
    req: RegisterRequest,
    session: AsyncSession = Depends(db_session),
    issuer: TokenIssuer = Depends(token_issuer),
) -> AuthResponse:
    """Register a new user and return their first token."""
    result = await register_user(
        session, req.username, str(req.email), req.password, issuer
    )
    await session.commit()
    return AuthResponse(**result.public_profile())


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(db_session),
    issuer: TokenIssuer = Depends(token_issuer),
) -> AuthResponse:
    """Login with username + password."""
    result = await authenticate_user(session, req.username, req.password, issuer)
    return AuthResponse(**result.public_profile())
