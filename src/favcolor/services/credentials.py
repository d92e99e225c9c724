"""Credential storage: username to password-hash mapping."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Final

from favcolor.core.errors import (
    InvalidCredentialsError,
    MissingFieldsError,
    PasswordTooLongError,
    UsernameTakenError,
)
from favcolor.core.security import MAX_PASSWORD_BYTES, PasswordHasher
from favcolor.db.store import KeyValueStore

__all__ = ["CredentialStore", "User", "USER_PREFIX"]

logger = logging.getLogger(__name__)

USER_PREFIX: Final[str] = "users"
_INVALID_CREDENTIALS: Final[str] = "Invalid username or password"


@dataclass(frozen=True)
class User:
    """A registered account. Immutable once created."""

    username: str
    password_hash: str

    def to_document(self) -> dict[str, Any]:
        return {"username": self.username, "passwordHash": self.password_hash}

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> User:
        return cls(username=document["username"], password_hash=document["passwordHash"])


class CredentialStore:
    """Registers and verifies accounts against the key-value store.

    Password hashing runs in a worker thread so bcrypt's deliberate slowness
    never blocks the event loop.
    """

    def __init__(self, store: KeyValueStore, hasher: PasswordHasher) -> None:
        self._store = store
        self._hasher = hasher

    async def register(self, username: str | None, password: str | None) -> User:
        """Create a new account.

        Args:
            username: Desired unique account name.
            password: Plaintext password; only its hash is persisted.

        Returns:
            The stored user.

        Raises:
            MissingFieldsError: If either field is empty.
            PasswordTooLongError: If the password exceeds bcrypt's 72-byte input.
            UsernameTakenError: If the username already exists, including when a
                concurrent signup claimed it first.
        """
        if not username or not password:
            raise MissingFieldsError("username and password are required")
        if not self._hasher.is_acceptable(password):
            raise PasswordTooLongError(MAX_PASSWORD_BYTES)

        key = (USER_PREFIX, username)
        # Cheap early exit; the set-if-absent below is what enforces uniqueness.
        if await self._store.get(key) is not None:
            raise UsernameTakenError(username)

        password_hash = await asyncio.to_thread(self._hasher.hash, password)
        user = User(username=username, password_hash=password_hash)
        if not await self._store.set_if_absent(key, user.to_document()):
            raise UsernameTakenError(username)

        logger.info("Registered user %s", username)
        return user

    async def verify(self, username: str | None, password: str | None) -> User:
        """Return the user if `password` matches, else raise.

        Raises:
            InvalidCredentialsError: For an unknown username or a wrong password;
                callers cannot tell the two apart.
        """
        document = await self._store.get((USER_PREFIX, username)) if username else None
        if document is None:
            await asyncio.to_thread(self._hasher.dummy_verify)
            raise InvalidCredentialsError(_INVALID_CREDENTIALS)

        user = User.from_document(document)
        # bcrypt runs even for an empty password, as on the unknown-user path.
        matches = await asyncio.to_thread(self._hasher.verify, password or "", user.password_hash)
        if not matches:
            raise InvalidCredentialsError(_INVALID_CREDENTIALS)
        return user

    async def list_usernames(self) -> list[str]:
        """Return every registered username in key order."""
        documents = await self._store.list((USER_PREFIX,))
        return [document["username"] for document in documents]
