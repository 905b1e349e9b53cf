from __future__ import annotations

import pytest
from flask import Flask, session

from storefront.infrastructure.auth import (
    DatabaseSessionInterface,
    ServerSideSession,
    SqlAlchemySessionStore,
)
from storefront.infrastructure.container import Container
from storefront.infrastructure.db import init_db

LIFETIME = 600


class FakeClock:
    def __init__(self, now: float) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1_700_000_000)


@pytest.fixture
def store(container: Container, clock: FakeClock) -> SqlAlchemySessionStore:
    init_db(container.engine)
    return SqlAlchemySessionStore(container.database, clock=clock)


@pytest.fixture
def client(store: SqlAlchemySessionStore, clock: FakeClock):
    app = Flask(__name__)
    app.config.update(SECRET_KEY="k", SESSION_COOKIE_NAME="sid")
    app.session_interface = DatabaseSessionInterface(store, lifetime=LIFETIME, clock=clock)

    @app.post("/set")
    def set_value():
        session["admin_id"] = 3
        return "ok"

    @app.get("/get")
    def get_value():
        return {"admin_id": session.get("admin_id")}

    return app.test_client()


def test_store_round_trip(store: SqlAlchemySessionStore, clock: FakeClock) -> None:
    store.save("abc", {"admin_id": 1}, int(clock.now) + 10)
    store.save("abc", {"admin_id": 2}, int(clock.now) + 10)

    assert store.load("abc") == {"admin_id": 2}
    store.delete("abc")
    assert store.load("abc") is None


def test_expired_rows_are_not_loaded(store: SqlAlchemySessionStore, clock: FakeClock) -> None:
    store.save("old", {"admin_id": 1}, int(clock.now) + 10)
    clock.now += 10

    assert store.load("old") is None


def test_purge_expired(store: SqlAlchemySessionStore, clock: FakeClock) -> None:
    store.save("old", {"admin_id": 1}, int(clock.now) + 5)
    store.save("new", {"admin_id": 2}, int(clock.now) + 50)
    clock.now += 5

    assert store.purge_expired() == 1
    assert store.load("new") == {"admin_id": 2}


def test_session_survives_between_requests(client) -> None:
    client.post("/set")

    assert client.get("/get").get_json() == {"admin_id": 3}


def test_session_expires_after_lifetime(client, clock: FakeClock) -> None:
    client.post("/set")
    clock.now += LIFETIME

    assert client.get("/get").get_json() == {"admin_id": None}


def test_empty_session_sets_no_cookie(client) -> None:
    response = client.get("/get")

    assert "Set-Cookie" not in response.headers


def test_regenerate_keeps_data_under_new_id() -> None:
    sess = ServerSideSession({"admin_id": 1}, sid="old")
    sess.regenerate()

    assert sess.sid != "old"
    assert len(sess.sid) == 64
    assert sess.previous_sid == "old"
    assert sess["admin_id"] == 1
    assert sess.modified
