# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from authservice.application.services.password_hashing import BcryptPasswordHasher
from authservice.application.services.token_issuer import JwtTokenIssuer
from authservice.application.use_cases.users.login_user import LoginUserUseCase
from authservice.application.use_cases.users.register_user import RegisterUserUseCase
from authservice.infrastructure.db.session import Database
from authservice.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from authservice.interfaces.http.controllers.auth_controller import AuthController
from authservice.interfaces.http.controllers.health_controller import HealthController
from authservice.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig, *, database: Database | None = None) -> None:
        self.config = config
        self._database = database

    @cached_property
    def database(self) -> Database:
        return self._database or Database(self.config.database)

    @cached_property
    def password_hasher(self) -> BcryptPasswordHasher:
        return BcryptPasswordHasher(rounds=self.config.auth.bcrypt_rounds)

    @cached_property
    def token_issuer(self) -> JwtTokenIssuer:
        return JwtTokenIssuer(
            secret=self.config.auth.jwt_secret,
            ttl=timedelta(seconds=self.config.auth.jwt_expires_in),
        )

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            tokens=self.token_issuer,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            url_prefix=self.config.server.api_prefix,
        )

    @cached_property
    def health_controller(self) -> HealthController:
        return HealthController(database=self.database)
