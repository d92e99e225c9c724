"""Key-value storage backends.

The service treats its database as an ordered, prefix-scannable key-value
store with two atomic primitives: set-if-absent (used for username
uniqueness) and increment (used to mint record IDs). Keys are tuples of
string and non-negative integer parts; integer parts sort numerically within a
prefix, so `list(("colors",))` yields records in ID order.

Values are JSON documents. Both backends serialize on write, so callers never
share mutable state with the store.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from threading import Lock
from typing import Any, Final
from urllib.parse import quote

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from favcolor.core.errors import ConfigurationError, StoreUnavailableError
from favcolor.core.settings import Settings

logger = logging.getLogger(__name__)

KeyPart = str | int
Key = tuple[KeyPart, ...]

MEMORY_URL: Final[str] = "memory://"
_SEPARATOR: Final[str] = ":"
_INT_WIDTH: Final[int] = 20


def _encode_part(part: KeyPart) -> str:
    if isinstance(part, bool):
        raise TypeError("Key parts must be str or int, not bool")
    if isinstance(part, int):
        if part < 0:
            raise ValueError("Integer key parts must be non-negative")
        return f"n{part:0{_INT_WIDTH}d}"
    if isinstance(part, str):
        return "s" + quote(part, safe="")
    raise TypeError(f"Unsupported key part type: {type(part).__name__}")


def encode_key(namespace: str, key: Key) -> str:
    """Flatten a tuple key into a single sortable string.

    Args:
        namespace: Prefix isolating this service's keys inside a shared backend.
        key: Non-empty tuple of str/int parts.

    Returns:
        The encoded key. Separator and glob characters inside string parts are
        percent-escaped, so encoded prefixes are safe to use in SCAN patterns.
    """
    if not key:
        raise ValueError("Keys must contain at least one part")
    return _SEPARATOR.join([quote(namespace, safe=""), *(_encode_part(p) for p in key)])


class KeyValueStore(ABC):
    """Async interface shared by every storage backend."""

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace

    def _key(self, key: Key) -> str:
        return encode_key(self.namespace, key)

    def _prefix(self, prefix: Key) -> str:
        return encode_key(self.namespace, prefix) + _SEPARATOR

    @abstractmethod
    async def get(self, key: Key) -> Any | None:
        """Return the value stored at `key`, or None."""

    @abstractmethod
    async def set(self, key: Key, value: Any) -> None:
        """Store `value` at `key`, replacing any previous value."""

    @abstractmethod
    async def set_if_absent(self, key: Key, value: Any) -> bool:
        """Atomically store `value` only if `key` is absent. Return True if written."""

    @abstractmethod
    async def delete(self, key: Key) -> bool:
        """Remove `key`. Return True if something was deleted."""

    @abstractmethod
    async def increment(self, key: Key, amount: int = 1) -> int:
        """Atomically add `amount` to the integer at `key` and return the new value."""

    @abstractmethod
    async def list(self, prefix: Key) -> list[Any]:
        """Return the values of every key under `prefix`, in ascending key order."""

    async def close(self) -> None:
        """Release backend resources."""


class MemoryStore(KeyValueStore):
    """In-process store for development and tests.

    State lives only as long as the process; a lock keeps each operation
    atomic even when called from worker threads.
    """

    def __init__(self, namespace: str = "favcolor") -> None:
        super().__init__(namespace)
        self._data: dict[str, str] = {}
        self._lock = Lock()

    async def get(self, key: Key) -> Any | None:
        with self._lock:
            raw = self._data.get(self._key(key))
        return None if raw is None else json.loads(raw)

    async def set(self, key: Key, value: Any) -> None:
        raw = json.dumps(value)
        with self._lock:
            self._data[self._key(key)] = raw

    async def set_if_absent(self, key: Key, value: Any) -> bool:
        raw = json.dumps(value)
        encoded = self._key(key)
        with self._lock:
            if encoded in self._data:
                return False
            self._data[encoded] = raw
            return True

    async def delete(self, key: Key) -> bool:
        with self._lock:
            return self._data.pop(self._key(key), None) is not None

    async def increment(self, key: Key, amount: int = 1) -> int:
        encoded = self._key(key)
        with self._lock:
            current = json.loads(self._data.get(encoded, "0"))
            if not isinstance(current, int):
                raise TypeError(f"Value at {key!r} is not an integer counter")
            current += amount
            self._data[encoded] = json.dumps(current)
            return current

    async def list(self, prefix: Key) -> list[Any]:
        encoded_prefix = self._prefix(prefix)
        with self._lock:
            raws = [
                self._data[name]
                for name in sorted(self._data)
                if name.startswith(encoded_prefix)
            ]
        return [json.loads(raw) for raw in raws]


class RedisStore(KeyValueStore):
    """Redis-backed store using `redis.asyncio`.

    Set-if-absent maps to `SET NX` and increment to `INCR`, both atomic on
    the server. Prefix listing uses `SCAN` followed by `MGET`; the snapshot is
    not transactional, matching the eventual-consistency contract for reads.
    """

    def __init__(self, client: aioredis.Redis, namespace: str = "favcolor") -> None:
        super().__init__(namespace)
        self._client = client

    @classmethod
    def from_url(cls, url: str, namespace: str = "favcolor") -> RedisStore:
        """Build a store from a redis:// URL."""
        return cls(aioredis.from_url(url, decode_responses=True), namespace)

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except RedisError as err:
            logger.error("Redis %s failed: %s", operation, err)
            raise StoreUnavailableError(f"Store operation '{operation}' failed") from err

    async def get(self, key: Key) -> Any | None:
        with self._translate_errors("get"):
            raw = await self._client.get(self._key(key))
        return None if raw is None else json.loads(raw)

    async def set(self, key: Key, value: Any) -> None:
        with self._translate_errors("set"):
            await self._client.set(self._key(key), json.dumps(value))

    async def set_if_absent(self, key: Key, value: Any) -> bool:
        with self._translate_errors("set_if_absent"):
            written = await self._client.set(self._key(key), json.dumps(value), nx=True)
        return bool(written)

    async def delete(self, key: Key) -> bool:
        with self._translate_errors("delete"):
            removed = await self._client.delete(self._key(key))
        return bool(removed)

    async def increment(self, key: Key, amount: int = 1) -> int:
        with self._translate_errors("increment"):
            return int(await self._client.incrby(self._key(key), amount))

    async def list(self, prefix: Key) -> list[Any]:
        pattern = self._prefix(prefix) + "*"
        with self._translate_errors("list"):
            names = sorted([name async for name in self._client.scan_iter(match=pattern, count=500)])
            if not names:
                return []
            raws = await self._client.mget(names)
        # Keys deleted between SCAN and MGET come back as None.
        return [json.loads(raw) for raw in raws if raw is not None]

    async def close(self) -> None:
        await self._client.aclose()


def open_store(settings: Settings) -> KeyValueStore:
    """Create the backend selected by `settings.store_url`.

    Raises:
        ConfigurationError: If the URL names an unsupported backend.
    """
    if settings.uses_redis:
        logger.info("Using Redis store (namespace=%s)", settings.store_namespace)
        return RedisStore.from_url(settings.store_url, settings.store_namespace)
    if settings.store_url == MEMORY_URL:
        logger.info("Using in-memory store; data is lost on restart")
        return MemoryStore(settings.store_namespace)
    raise ConfigurationError(f"Unsupported STORE_URL: {settings.store_url}")
