# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.password_hashing import BcryptPasswordHasher, MalformedHashError
from .services.token_issuer import JwtTokenIssuer
from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase

__all__ = [
    "BcryptPasswordHasher",
    "JwtTokenIssuer",
    "LoginUserUseCase",
    "MalformedHashError",
    "RegisterUserUseCase",
]
