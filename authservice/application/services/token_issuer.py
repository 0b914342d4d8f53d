"""Session token issuing and verification (JWT, HS256)."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from authservice.domain.users.entities import TokenClaims
from authservice.domain.users.exceptions import InvalidTokenError, TokenSigningError
from authservice.domain.users.repositories import TokenIssuer

DEFAULT_TTL = timedelta(hours=1)


class JwtTokenIssuer(TokenIssuer):
    """Signs and verifies session tokens.

    Claims: ``sub`` (user id), ``email``, optional ``role``, ``iat`` and
    ``exp``. ``secret`` and ``ttl`` given per call override the configured
    ones.
    """

    ALGORITHM = "HS256"

    def __init__(self, secret: str, ttl: timedelta = DEFAULT_TTL) -> None:
        self._secret = secret
        self._ttl = ttl

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(
        self,
        claims: TokenClaims,
        secret: str | None = None,
        ttl: timedelta | None = None,
    ) -> str:
        key = self._secret if secret is None else secret
        if not key:
            raise TokenSigningError("JWT secret is required")

        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": claims.user_id,
            "email": claims.email,
            "iat": now,
            "exp": now + (ttl or self._ttl),
        }
        if claims.role is not None:
            payload["role"] = claims.role

        try:
            return jwt.encode(payload, key, algorithm=self.ALGORITHM)
        except (jwt.PyJWTError, TypeError, ValueError) as exc:
            raise TokenSigningError() from exc

    def verify(self, token: str, secret: str | None = None) -> TokenClaims:
        key = self._secret if secret is None else secret
        if not key:
            raise InvalidTokenError("JWT secret is required")

        try:
            payload = jwt.decode(
                token,
                key,
                algorithms=[self.ALGORITHM],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError() from exc

        try:
            return TokenClaims(
                user_id=str(payload["sub"]),
                email=str(payload["email"]),
                role=payload.get("role"),
                issued_at=datetime.fromtimestamp(payload["iat"], tz=UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidTokenError("Malformed token payload") from exc
