# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users.entities import NewUser, TokenClaims, User
from .users.repositories import PasswordHasher, TokenIssuer, UserRepository

__all__ = [
    "NewUser",
    "PasswordHasher",
    "TokenClaims",
    "TokenIssuer",
    "User",
    "UserRepository",
]
