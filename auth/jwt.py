"""
JWT creation and verification.

Tokens are standard JWTs signed with ``config.jwt_secret`` (HS256 by
default) and carry the user's id, username and email so protected routes
can authorize without a database round trip.  Nothing is stored
server-side: validity is a pure function of the token, the secret and
the current time.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from config.settings import config
from utils.errors import TokenExpiredError, TokenInvalidError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    username: str
    email: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime


def _utc(ts: int) -> datetime:
    return datetime.fromtimestamp(ts, tz=timezone.utc)


class TokenIssuer:
    """Signs and validates bearer tokens with a fixed, process-wide secret."""

    def __init__(
        self,
        secret: str,
        *,
        issuer: str,
        audience: str,
        lifetime_minutes: int = 60,
        algorithm: str = "HS256",
    ):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self.issuer = issuer
        self.audience = audience
        self.lifetime_seconds = lifetime_minutes * 60
        self.algorithm = algorithm

    def issue(
        self,
        user_id: int,
        username: str,
        email: str,
        now: Optional[float] = None,
    ) -> IssuedToken:
        """Create a signed token valid for ``lifetime_minutes`` from *now*."""
        issued_at = int(now if now is not None else time.time())
        expires_at = issued_at + self.lifetime_seconds
        claims: Dict[str, Any] = {
            "sub": str(user_id),
            "username": username,
            "email": email,
            "iat": issued_at,
            "exp": expires_at,
            "iss": self.issuer,
            "aud": self.audience,
        }
        token = jwt.encode(claims, self._secret, algorithm=self.algorithm)
        return IssuedToken(token=token, expires_at=_utc(expires_at))

    def validate(self, token: str, now: Optional[float] = None) -> TokenClaims:
        """
        Verify signature, issuer, audience and expiry.

        A token stays valid up to and including its ``exp`` second.
        Raises ``TokenExpiredError`` once that has passed and
        ``TokenInvalidError`` for anything else wrong with the token.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                # expiry is checked below against an injectable clock;
                # any require_exp option would switch jose's own check back on
                options={
                    "verify_exp": False,
                    "require_iat": True,
                    "require_sub": True,
                },
            )
        except ExpiredSignatureError as exc:
            raise TokenExpiredError(str(exc)) from exc
        except JWTError as exc:
            raise TokenInvalidError(str(exc)) from exc

        try:
            user_id = int(payload["sub"])
            expires_at = int(payload["exp"])
            issued_at = int(payload["iat"])
        except (KeyError, TypeError, ValueError) as exc:
            raise TokenInvalidError(f"malformed claims: {exc}") from exc

        current = now if now is not None else time.time()
        if current > expires_at:
            raise TokenExpiredError()

        return TokenClaims(
            user_id=user_id,
            username=payload.get("username", ""),
            email=payload.get("email", ""),
            issued_at=_utc(issued_at),
            expires_at=_utc(expires_at),
        )


@lru_cache
def get_token_issuer() -> TokenIssuer:
    """The process-wide issuer, built once from settings."""
    if config.uses_default_secret:
        logger.warning("JWT_SECRET not set — using the built-in development secret")
    return TokenIssuer(
        config.jwt_secret,
        issuer=config.jwt_issuer,
        audience=config.jwt_audience,
        lifetime_minutes=config.jwt_expiry_minutes,
        algorithm=config.jwt_algorithm,
    )
