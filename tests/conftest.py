# tests/conftest.py
from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import Response

from favcolor.application import create_app
from favcolor.core.security import PasswordHasher
from favcolor.core.settings import Settings
from favcolor.db.store import MemoryStore
from favcolor.services.aggregation import ColorFeed
from favcolor.services.credentials import CredentialStore
from favcolor.services.favorites import FavoritesIndex
from favcolor.services.records import RecordStore
from favcolor.services.tokens import SessionTokenService

TEST_SECRET = "test-session-secret-0123456789abcdef"
# bcrypt's minimum cost keeps the suite fast.
FAST_BCRYPT_ROUNDS = 4
TEST_TTL_SECONDS = 3600
START_TIME = 1_700_000_000


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = START_TIME) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def test_settings() -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    return Settings(
        _env_file=None,
        session_secret=TEST_SECRET,
        session_ttl_seconds=TEST_TTL_SECONDS,
        bcrypt_rounds=FAST_BCRYPT_ROUNDS,
        store_url="memory://",
        store_namespace="favcolor-test",
    )


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore(namespace="favcolor-test")


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=FAST_BCRYPT_ROUNDS)


@pytest.fixture()
def token_service(clock: FakeClock) -> SessionTokenService:
    return SessionTokenService(TEST_SECRET, ttl_seconds=TEST_TTL_SECONDS, clock=clock)


@pytest.fixture()
def credential_store(store: MemoryStore, hasher: PasswordHasher) -> CredentialStore:
    return CredentialStore(store, hasher)


@pytest.fixture()
def record_store(store: MemoryStore) -> RecordStore:
    return RecordStore(store)


@pytest.fixture()
def favorites_index(store: MemoryStore) -> FavoritesIndex:
    return FavoritesIndex(store)


@pytest.fixture()
def color_feed(record_store: RecordStore, favorites_index: FavoritesIndex) -> ColorFeed:
    return ColorFeed(record_store, favorites_index)


@pytest.fixture()
def app(test_settings: Settings, store: MemoryStore) -> FastAPI:
    return create_app(test_settings, store=store)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client


@pytest.fixture()
def make_client(app: FastAPI) -> Callable[[], TestClient]:
    """Return a factory for extra clients with their own cookie jars."""

    def _make() -> TestClient:
        return TestClient(app, base_url="http://testserver")

    return _make


@pytest.fixture()
def signup() -> Callable[..., Response]:
    def _signup(client: TestClient, username: str, password: str) -> Response:
        return client.post("/api/signup", json={"username": username, "password": password})

    return _signup


@pytest.fixture()
def login() -> Callable[..., Response]:
    def _login(client: TestClient, username: str, password: str) -> Response:
        return client.post("/api/login", json={"username": username, "password": password})

    return _login


@pytest.fixture()
def post_color() -> Callable[..., Response]:
    def _post_color(client: TestClient, color: str, comment: str = "", **extra: Any) -> Response:
        record = {"color": color, "comment": comment, **extra}
        return client.post("/api/colors", data={"record": json.dumps(record)})

    return _post_color


@pytest.fixture()
def alice_client(
    make_client: Callable[[], TestClient],
    signup: Callable[..., Response],
    login: Callable[..., Response],
) -> TestClient:
    """A client holding a session cookie for user 'alice'."""
    test_client = make_client()
    assert signup(test_client, "alice", "pw123").status_code == 201
    assert login(test_client, "alice", "pw123").status_code == 200
    return test_client


@pytest.fixture()
def bob_client(
    make_client: Callable[[], TestClient],
    signup: Callable[..., Response],
    login: Callable[..., Response],
) -> TestClient:
    """A client holding a session cookie for user 'bob'."""
    test_client = make_client()
    assert signup(test_client, "bob", "hunter2").status_code == 201
    assert login(test_client, "bob", "hunter2").status_code == 200
    return test_client
