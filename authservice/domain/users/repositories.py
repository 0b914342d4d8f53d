# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from typing import Protocol

from .entities import NewUser, TokenClaims, User


class UserRepository(Protocol):
    """Persistence of users keyed by unique normalized email.

    Implementations raise only :mod:`authservice.shared.errors.storage`
    errors: ``DuplicateEntry`` on a unique-email violation, ``EntityNotFound``
    from ``find_by_id``, ``QueryFailure``/``ConnectionFailure`` otherwise.
    """

    def create(self, user: NewUser) -> User: ...
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_id(self, user_id: str) -> User: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenIssuer(Protocol):
    def issue(
        self,
        claims: TokenClaims,
        secret: str | None = None,
        ttl: timedelta | None = None,
    ) -> str: ...

    def verify(self, token: str, secret: str | None = None) -> TokenClaims: ...
