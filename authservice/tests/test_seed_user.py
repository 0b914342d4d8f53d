from __future__ import annotations

import json
from collections.abc import Iterator

import pytest

from authservice.infrastructure.container import Container
from authservice.infrastructure.db import Database
from authservice.scripts.seed_user import main, seed_user
from authservice.shared.config import AppConfig, load_config
from authservice.shared.errors.base import ConflictError


@pytest.fixture()
def seed_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    load_config.cache_clear()
    yield
    load_config.cache_clear()


def test_seed_user_goes_through_registration_rules(app_config: AppConfig, database: Database) -> None:
    container = Container(app_config, database=database)

    user = seed_user(container, "seed_user", "Seed@Example.com", "Seed1234!")

    assert user["email"] == "seed@example.com"
    assert "hashed_password" not in user
    with pytest.raises(ConflictError):
        seed_user(container, "seed_user", "seed@example.com", "Seed1234!")


def test_main_prints_created_user(seed_env: None, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--name", "seed_user", "--email", "seed@example.com", "--password", "Seed1234!"])

    assert code == 0
    printed = json.loads(capsys.readouterr().out)
    assert printed["name"] == "seed_user"
    assert printed["email"] == "seed@example.com"


def test_main_reports_rule_violations(seed_env: None, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--password", "weak"])

    assert code == 1
    assert "ValidationError: Password must be at least 8 characters long" in capsys.readouterr().err
