from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from authservice.shared.config import AppConfig, AuthConfig, SecurityConfig, ServerConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "APP_ENV",
        "DEBUG_LOGGING",
        "JWT_SECRET",
        "JWT_EXPIRES_IN",
        "BCRYPT_ROUNDS",
        "PORT",
        "API_PREFIX",
        "ALLOWED_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    auth = AuthConfig()
    server = ServerConfig()

    assert auth.jwt_expires_in == 3600
    assert auth.bcrypt_rounds == 10
    assert server.port == 3001
    assert server.api_prefix == "/api/v1"


def test_sections_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_EXPIRES_IN", "120")
    monkeypatch.setenv("BCRYPT_ROUNDS", "12")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example,")

    config = AppConfig()

    assert config.auth.jwt_expires_in == 120
    assert config.auth.bcrypt_rounds == 12
    assert config.security.allowed_origins == ["https://a.example", "https://b.example"]


@pytest.mark.parametrize("rounds", ["3", "17"])
def test_bcrypt_rounds_out_of_range(monkeypatch: pytest.MonkeyPatch, rounds: str) -> None:
    monkeypatch.setenv("BCRYPT_ROUNDS", rounds)

    with pytest.raises(PydanticValidationError):
        AuthConfig()


@pytest.mark.parametrize(
    ("prefix", "expected"),
    [("api/v2/", "/api/v2"), ("/api/v1", "/api/v1"), ("/", "")],
)
def test_api_prefix_is_normalized(prefix: str, expected: str) -> None:
    assert ServerConfig(api_prefix=prefix).api_prefix == expected


def test_production_refuses_insecure_secret() -> None:
    with pytest.raises(SystemExit):
        AppConfig(app_env="production", auth=AuthConfig(jwt_secret="dev"))


@pytest.mark.parametrize("env", ["staging", "qa"])
def test_deployed_envs_refuse_default_secret(env: str) -> None:
    with pytest.raises(SystemExit):
        AppConfig(app_env=env)


@pytest.mark.parametrize("env", ["development", "test"])
def test_local_envs_allow_default_secret(env: str) -> None:
    assert AppConfig(app_env=env).auth.jwt_secret == "dev"


def test_staging_accepts_strong_secret() -> None:
    config = AppConfig(app_env="staging", auth=AuthConfig(jwt_secret="stage-secret-0123456789abcdef0123456789"))

    assert not config.is_production()


def test_internal_errors_exposed_only_in_debug_development() -> None:
    strong = AuthConfig(jwt_secret="prod-secret-0123456789abcdef0123456789")

    assert AppConfig(app_env="development", debug_logging=True).expose_internal_errors()
    assert not AppConfig(app_env="development", debug_logging=False).expose_internal_errors()
    assert not AppConfig(
        app_env="production",
        debug_logging=True,
        auth=strong,
        security=SecurityConfig(allowed_origins=["https://app.example"]),
    ).expose_internal_errors()
