from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from storefront.app import create_app
from storefront.infrastructure.container import Container
from storefront.shared.config import AppConfig

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "s3cret-pass"


@pytest.fixture(autouse=True)
def _no_log_file(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_FILE", "")


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        _env_file=None,
        APP_ENV="test",
        SECRET_KEY="test-secret-key",
        DATABASE_URL=f"sqlite:///{tmp_path / 'storefront.db'}",
        JWT_SECRET="test-jwt-secret-value-long-enough-for-hs256",
        JWT_TTL=3600,
        ADMIN_EMAIL=ADMIN_EMAIL,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        ADMIN_NAME="Root",
    )


@pytest.fixture
def container(config: AppConfig) -> Iterator[Container]:
    container = Container(config)
    yield container
    container.engine.dispose()


@pytest.fixture
def app(container: Container) -> Flask:
    app = create_app(container=container)
    app.testing = True
    return app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture
def token(client: FlaskClient) -> str:
    response = client.post(
        "/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    return response.get_json()["token"]


@pytest.fixture
def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_client(client: FlaskClient) -> FlaskClient:
    response = client.post(
        "/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    return client
