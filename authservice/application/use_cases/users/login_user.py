# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from authservice.application.use_cases.users.inputs import LoginUserInput, parse_input
from authservice.domain.users.entities import TokenClaims, User
from authservice.domain.users.exceptions import (
    InvalidCredentialsError,
    TokenGenerationError,
    UserStoreUnavailableError,
)
from authservice.domain.users.repositories import PasswordHasher, TokenIssuer, UserRepository
from authservice.shared.errors.storage import RepositoryError
from authservice.shared.logging import logger

_TIMING_DUMMY_PASSWORD = "authservice_timing_dummy"


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        tokens: TokenIssuer,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._tokens = tokens
        # Unknown emails are verified against this so both failure paths cost one hash check.
        self._dummy_hash = password_hasher.hash(_TIMING_DUMMY_PASSWORD)

    def execute(self, data: object) -> dict[str, Any]:
        dto = parse_input(LoginUserInput, data, invalid_message="Invalid login data provided")

        try:
            user = self._users.find_by_email(dto.email)
        except RepositoryError as exc:
            raise UserStoreUnavailableError() from exc

        if user is None:
            self._password_hasher.verify(dto.password, self._dummy_hash)
            logger.info("auth.login: rejected unknown email")
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(dto.password, user.hashed_password):
            logger.info(f"auth.login: rejected password user_id={user.id}")
            raise InvalidCredentialsError()

        token = self._issue_token(user)
        logger.info(f"auth.login: ok user_id={user.id}")
        return {"token": token, "user": user.sanitized()}

    def _issue_token(self, user: User) -> str:
        claims = TokenClaims(user_id=user.id, email=user.email, role=user.role)
        try:
            return self._tokens.issue(claims)
        except Exception as exc:
            logger.opt(exception=exc).error(f"auth.login: token generation failed user_id={user.id}")
            raise TokenGenerationError() from exc
