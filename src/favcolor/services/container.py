"""Wiring of the service graph around a single store handle."""
from __future__ import annotations

import time
from dataclasses import dataclass

from favcolor.core.security import PasswordHasher
from favcolor.core.settings import Settings
from favcolor.db.store import KeyValueStore
from favcolor.services.aggregation import ColorFeed
from favcolor.services.credentials import CredentialStore
from favcolor.services.favorites import FavoritesIndex
from favcolor.services.records import RecordStore
from favcolor.services.tokens import Clock, SessionTokenService


@dataclass(frozen=True)
class Services:
    """Every service the HTTP layer needs, sharing one store."""

    store: KeyValueStore
    credentials: CredentialStore
    tokens: SessionTokenService
    records: RecordStore
    favorites: FavoritesIndex
    feed: ColorFeed


def build_services(settings: Settings, store: KeyValueStore, clock: Clock = time.time) -> Services:
    """Construct the service graph.

    Raises:
        ConfigurationError: If the session secret policy is not satisfied.
    """
    tokens = SessionTokenService.from_settings(settings, clock=clock)
    records = RecordStore(store)
    favorites = FavoritesIndex(store)
    return Services(
        store=store,
        credentials=CredentialStore(store, PasswordHasher(rounds=settings.bcrypt_rounds)),
        tokens=tokens,
        records=records,
        favorites=favorites,
        feed=ColorFeed(records, favorites),
    )
