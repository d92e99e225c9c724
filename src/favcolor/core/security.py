"""Password hashing built on passlib's bcrypt handler."""
from __future__ import annotations

from passlib.context import CryptContext
from passlib.exc import UnknownHashError

from favcolor.core.errors import PasswordTooLongError

DEFAULT_BCRYPT_ROUNDS = 12
# bcrypt only reads the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Salted, adaptive-cost password hashing.

    Every call to `hash` draws a fresh salt, so hashing the same password twice
    yields different strings. Raising `rounds` makes new hashes slower to
    compute while existing hashes keep verifying.
    """

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    @staticmethod
    def is_acceptable(password: str) -> bool:
        """Return True if `password` fits within bcrypt's input limit."""
        return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES

    def hash(self, password: str) -> str:
        """Return a bcrypt hash of `password`.

        Raises:
            PasswordTooLongError: If `password` exceeds `MAX_PASSWORD_BYTES`
                once UTF-8 encoded; bcrypt would otherwise ignore the excess.
        """
        if not self.is_acceptable(password):
            raise PasswordTooLongError(MAX_PASSWORD_BYTES)
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """Return True if `password` matches `password_hash`.

        Malformed or foreign hashes, and passwords over the length limit,
        verify as False instead of raising.
        """
        if not self.is_acceptable(password):
            self._context.dummy_verify()
            return False
        try:
            return self._context.verify(password, password_hash)
        except (UnknownHashError, ValueError, TypeError):
            return False

    def dummy_verify(self) -> None:
        """Spend roughly one verify worth of time without a stored hash."""
        self._context.dummy_verify()
