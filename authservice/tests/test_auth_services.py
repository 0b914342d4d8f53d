from __future__ import annotations

from datetime import timedelta

import jwt
import pytest

from authservice.application.services.password_hashing import BcryptPasswordHasher, MalformedHashError
from authservice.application.services.token_issuer import JwtTokenIssuer
from authservice.domain.users.entities import TokenClaims
from authservice.shared.errors.base import AuthenticationError, ErrorKind

SECRET = "services-secret-0123456789abcdef0123456789"


@pytest.fixture()
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


def test_hash_is_salted_and_verifiable(hasher: BcryptPasswordHasher) -> None:
    first = hasher.hash("Password123!")
    second = hasher.hash("Password123!")

    assert first != second
    assert first.startswith("$2b$04$")
    assert hasher.verify("Password123!", first)
    assert hasher.verify("Password123!", second)
    assert not hasher.verify("Password123?", first)


def test_hash_accepts_passwords_longer_than_72_bytes(hasher: BcryptPasswordHasher) -> None:
    long_password = "Aa1!" + "x" * 100

    hashed = hasher.hash(long_password)

    assert hasher.verify(long_password, hashed)


def test_verify_rejects_malformed_hash(hasher: BcryptPasswordHasher) -> None:
    with pytest.raises(MalformedHashError):
        hasher.verify("Password123!", "not-a-bcrypt-hash")


def test_token_round_trip_carries_identity() -> None:
    issuer = JwtTokenIssuer(SECRET, ttl=timedelta(minutes=5))

    token = issuer.issue(TokenClaims(user_id="c" * 32, email="a@b.co", role="admin"))
    claims = issuer.verify(token)

    assert claims.user_id == "c" * 32
    assert claims.email == "a@b.co"
    assert claims.role == "admin"
    assert claims.expires_at - claims.issued_at == timedelta(minutes=5)


def test_token_omits_role_when_absent() -> None:
    issuer = JwtTokenIssuer(SECRET)

    token = issuer.issue(TokenClaims(user_id="c" * 32, email="a@b.co"))
    payload = jwt.decode(token, SECRET, algorithms=["HS256"])

    assert set(payload) == {"sub", "email", "iat", "exp"}
    assert payload["exp"] - payload["iat"] == 3600


def test_per_call_secret_and_ttl_override_configured_ones() -> None:
    issuer = JwtTokenIssuer(SECRET)

    token = issuer.issue(
        TokenClaims(user_id="c" * 32, email="a@b.co"),
        secret="another-secret-0123456789abcdef012345",
        ttl=timedelta(seconds=30),
    )

    with pytest.raises(AuthenticationError):
        issuer.verify(token)
    claims = issuer.verify(token, secret="another-secret-0123456789abcdef012345")
    assert claims.expires_at - claims.issued_at == timedelta(seconds=30)


def test_expired_token_is_rejected() -> None:
    issuer = JwtTokenIssuer(SECRET)

    token = issuer.issue(TokenClaims(user_id="c" * 32, email="a@b.co"), ttl=timedelta(seconds=-5))

    with pytest.raises(AuthenticationError, match="Token has expired"):
        issuer.verify(token)


def test_tampered_token_is_rejected() -> None:
    issuer = JwtTokenIssuer(SECRET)
    token = issuer.issue(TokenClaims(user_id="c" * 32, email="a@b.co"))
    header, payload, signature = token.split(".")
    forged = ".".join([header, payload, signature[::-1]])

    with pytest.raises(AuthenticationError) as excinfo:
        issuer.verify(forged)

    assert excinfo.value.kind is ErrorKind.AUTHENTICATION


def test_empty_secret_refuses_to_sign() -> None:
    issuer = JwtTokenIssuer("")

    with pytest.raises(AuthenticationError, match="JWT secret is required"):
        issuer.issue(TokenClaims(user_id="c" * 32, email="a@b.co"))
