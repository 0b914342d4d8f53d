# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authservice.shared.errors.base import AuthenticationError, ConflictError, InternalError


class EmailAlreadyExistsError(ConflictError):
    default_message = "Email already exists"


class UserAlreadyExistsError(ConflictError):
    default_message = "User already exists"


class InvalidCredentialsError(AuthenticationError):
    default_message = "Invalid credentials"


class TokenGenerationError(AuthenticationError):
    default_message = "Failed to generate authentication token"


class TokenSigningError(AuthenticationError):
    default_message = "Token signing failed"


class InvalidTokenError(AuthenticationError):
    default_message = "Invalid or expired token"


class UserStoreUnavailableError(InternalError):
    default_message = "User store unavailable"
