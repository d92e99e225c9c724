"""Domain exceptions shared by the favcolor services.

Services raise these; the HTTP layer maps them onto status codes so that no
store keys or internal messages reach clients.
"""

from __future__ import annotations


class FavcolorError(RuntimeError):
    """Base exception for all favcolor domain failures."""


class ConfigurationError(FavcolorError):
    """Raised at startup when required configuration is missing or unsafe."""


class MissingFieldsError(FavcolorError):
    """Raised when a request omits a required field or sends malformed input."""


class UsernameTakenError(FavcolorError):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str) -> None:
        super().__init__(f"Username already registered: {username}")
        self.username = username


class PasswordTooLongError(FavcolorError):
    """Raised when a new password exceeds what bcrypt can hash without truncation."""

    def __init__(self, max_bytes: int) -> None:
        super().__init__(f"Password must be at most {max_bytes} bytes")
        self.max_bytes = max_bytes


class AuthenticationError(FavcolorError):
    """Base for every failure that must surface as 401."""


class InvalidCredentialsError(AuthenticationError):
    """Unknown username or wrong password. The two cases are indistinguishable."""


class TokenExpiredError(AuthenticationError):
    """Session token is past its embedded expiry."""


class TokenInvalidError(AuthenticationError):
    """Session token is malformed, tampered with, or signed with another key."""


class StoreUnavailableError(FavcolorError):
    """Raised when the key-value backend cannot complete an operation."""
