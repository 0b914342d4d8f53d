# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from authservice.application.use_cases.users.inputs import RegisterUserInput, parse_input
from authservice.domain.users.entities import NewUser
from authservice.domain.users.exceptions import (
    EmailAlreadyExistsError,
    UserAlreadyExistsError,
    UserStoreUnavailableError,
)
from authservice.domain.users.repositories import PasswordHasher, UserRepository
from authservice.shared.errors.storage import DuplicateEntry, RepositoryError
from authservice.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, data: object) -> dict[str, Any]:
        dto = parse_input(RegisterUserInput, data, invalid_message="Invalid user data provided")

        try:
            existing = self._users.find_by_email(dto.email)
        except RepositoryError as exc:
            raise UserStoreUnavailableError() from exc
        if existing is not None:
            raise EmailAlreadyExistsError()

        hashed = self._password_hasher.hash(dto.password)
        new_user = NewUser(name=dto.name, email=dto.email, hashed_password=hashed)

        try:
            persisted = self._users.create(new_user)
        except DuplicateEntry as exc:
            # Lost a race with a concurrent registration for the same email.
            logger.info("auth.register: unique index rejected a pre-checked email")
            raise UserAlreadyExistsError() from exc
        except RepositoryError as exc:
            raise UserStoreUnavailableError() from exc

        logger.info(f"auth.register: ok user_id={persisted.id}")
        return persisted.sanitized()
