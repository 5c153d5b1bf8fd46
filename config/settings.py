"""
Application settings loaded from environment variables.
"""

from pydantic_settings import BaseSettings
from typing import List

DEFAULT_JWT_SECRET = "change-me-library-jwt-secret-key-32b"


class Settings(BaseSettings):
    app_name: str = "Library API"

    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = "sqlite+aiosqlite:///./library.db"
    database_echo: bool = False

    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: str = DEFAULT_JWT_SECRET    # HMAC secret for bearer tokens
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "LibraryAPI"
    jwt_audience: str = "LibraryClient"
    jwt_expiry_minutes: int = 60
    bcrypt_rounds: int = 12                 # bcrypt work factor

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 8000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: List[str] = ["*"]

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET


config = Settings()
