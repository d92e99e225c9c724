# src/favcolor/db/__init__.py
"""Storage backends and time helpers."""

from .store import KeyValueStore, MemoryStore, RedisStore, open_store

__all__ = ["KeyValueStore", "MemoryStore", "RedisStore", "open_store"]
