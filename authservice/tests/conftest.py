from __future__ import annotations

from collections.abc import Iterator

import pytest
from flask import Flask
from flask.testing import FlaskClient

from authservice.app import create_app
from authservice.infrastructure.db import Database
from authservice.shared.config import AppConfig, AuthConfig, DatabaseConfig

TEST_SECRET = "test-secret-0123456789abcdef0123456789abcdef"


@pytest.fixture()
def app_config() -> AppConfig:
    return AppConfig(
        app_env="test",
        log_level="WARNING",
        auth=AuthConfig(jwt_secret=TEST_SECRET, jwt_expires_in=3600, bcrypt_rounds=4),
        database=DatabaseConfig(url="sqlite://"),
    )


@pytest.fixture()
def database(app_config: AppConfig) -> Iterator[Database]:
    db = Database(app_config.database)
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture()
def flask_app(app_config: AppConfig, database: Database) -> Flask:
    return create_app(app_config, database=database)


@pytest.fixture()
def client(flask_app: Flask) -> FlaskClient:
    return flask_app.test_client()
