"""
Domain error taxonomy.

Every error carries the HTTP status and client-facing ``detail`` it maps
to; ``api.middleware`` turns them into JSON responses.
"""

from __future__ import annotations


class LibraryError(Exception):
    status_code: int = 500
    detail: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


# ── Registration / login ───────────────────────────────────────────────


class DuplicateUsernameError(LibraryError):
    status_code = 400
    detail = "Username already exists"


class DuplicateEmailError(LibraryError):
    status_code = 400
    detail = "Email already exists"


class InvalidCredentialsError(LibraryError):
    """Unknown username and wrong password deliberately look the same."""

    status_code = 401
    detail = "Invalid username or password"


# ── Bearer tokens ──────────────────────────────────────────────────────


class TokenInvalidError(LibraryError):
    status_code = 401
    detail = "Invalid or expired token"

    def __init__(self, reason: str = "invalid token"):
        # reason is for logs only; clients always see the generic detail
        self.reason = reason
        super().__init__()


class TokenExpiredError(TokenInvalidError):
    def __init__(self, reason: str = "token expired"):
        super().__init__(reason)


# ── Books ──────────────────────────────────────────────────────────────


class FieldValidationError(LibraryError):
    status_code = 400
    detail = "Validation failed"


class BookNotFoundError(LibraryError):
    """Raised for both missing books and books owned by someone else."""

    status_code = 404
    detail = "Book not found"


class ConcurrencyConflictError(LibraryError):
    status_code = 500
    detail = "Internal server error"
