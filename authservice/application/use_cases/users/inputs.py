# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Input rules for registration and login.

Fields are declared in the order their rules are checked; the use cases
surface only the first failure.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from authservice.domain.users.normalization import normalize_email
from authservice.shared.errors.base import ValidationError
from authservice.shared.errors.validation import raise_validation_error

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 8
LOGIN_PASSWORD_MIN_LENGTH = 6
PASSWORD_SYMBOLS = "!@#$%^&*(),.?\":{}|<>_-+=[]\\/;'`~"

_M = TypeVar("_M", bound=BaseModel)


def _required_string(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value:
        raise PydanticCustomError("missing", message)
    return value


def _checked_email(value: Any) -> str:
    email = normalize_email(_required_string(value, "Email is required"))
    if not EMAIL_PATTERN.fullmatch(email):
        raise PydanticCustomError("email_invalid", "Invalid email format")
    return email


class RegisterUserInput(BaseModel):
    name: str = Field(None, validate_default=True)
    email: str = Field(None, validate_default=True)
    password: str = Field(None, validate_default=True)
    confirm_password: Any = Field(None, alias="confirmPassword")

    model_config = ConfigDict(validate_by_name=True, validate_by_alias=True, extra="ignore", frozen=True)

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, value: Any) -> str:
        name = _required_string(value, "Name is required")
        if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
            raise PydanticCustomError(
                "name_length",
                f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters",
            )
        if not NAME_PATTERN.fullmatch(name):
            raise PydanticCustomError(
                "name_invalid_chars",
                "Name can only contain letters, numbers, and underscores",
            )
        return name

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, value: Any) -> str:
        return _checked_email(value)

    @field_validator("password", mode="before")
    @classmethod
    def validate_password_strength(cls, value: Any) -> str:
        password = _required_string(value, "Password is required")

        if len(password) < PASSWORD_MIN_LENGTH:
            raise PydanticCustomError(
                "password_too_short",
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
            )

        if not re.search(r"[A-Z]", password):
            raise PydanticCustomError(
                "password_no_uppercase",
                "Password must contain at least one uppercase letter",
            )

        if not re.search(r"[a-z]", password):
            raise PydanticCustomError(
                "password_no_lowercase",
                "Password must contain at least one lowercase letter",
            )

        if not re.search(r"[0-9]", password):
            raise PydanticCustomError(
                "password_no_digit",
                "Password must contain at least one digit",
            )

        if not any(char in PASSWORD_SYMBOLS for char in password):
            raise PydanticCustomError(
                "password_no_special",
                "Password must contain at least one special character",
            )

        return password

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterUserInput":
        if self.confirm_password != self.password:
            raise PydanticCustomError("password_mismatch", "Passwords do not match")
        return self


class LoginUserInput(BaseModel):
    email: str = Field(None, validate_default=True)
    password: str = Field(None, validate_default=True)

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, value: Any) -> str:
        return _checked_email(value)

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, value: Any) -> str:
        password = _required_string(value, "Password is required")
        if len(password) < LOGIN_PASSWORD_MIN_LENGTH:
            raise PydanticCustomError(
                "password_too_short",
                f"Password must be at least {LOGIN_PASSWORD_MIN_LENGTH} characters long",
            )
        return password


def parse_input(model: type[_M], data: object, *, invalid_message: str) -> _M:
    if not isinstance(data, Mapping):
        raise ValidationError(invalid_message)
    try:
        return model.model_validate(dict(data))
    except PydanticValidationError as exc:
        raise_validation_error(exc)


__all__ = [
    "EMAIL_PATTERN",
    "LoginUserInput",
    "NAME_PATTERN",
    "PASSWORD_SYMBOLS",
    "RegisterUserInput",
    "normalize_email",
    "parse_input",
]
