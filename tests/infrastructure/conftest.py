"""Fixtures backed by a throwaway SQLite file."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from storefront.infrastructure.bootstrap import Container
from storefront.infrastructure.config import Settings
from storefront.infrastructure.http.app import create_app
from storefront.infrastructure.security.passwords import BcryptPasswordHasher
from tests.fakes import FakePaymentGateway, RecordingPublisher

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "s3cret-admin"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'storefront.db'}",
        jwt_secret="test-secret",
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
        cors_origins=["http://localhost:5173"],
    )


@pytest.fixture
def container(settings):
    container = Container(
        settings,
        publisher=RecordingPublisher(),
        payment_gateway=FakePaymentGateway(),
        password_hasher=BcryptPasswordHasher(rounds=4),
    )
    container.init_database(seed=True)
    yield container
    container.close()


@pytest.fixture
def client(container) -> TestClient:
    return TestClient(create_app(container))


@pytest.fixture
def admin_headers(client) -> dict[str, str]:
    response = client.post(
        "/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}
