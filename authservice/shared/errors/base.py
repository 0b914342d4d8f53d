# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar


class ErrorKind(str, Enum):
    VALIDATION = "ValidationError"
    AUTHENTICATION = "AuthenticationError"
    AUTHORIZATION = "AuthorizationError"
    NOT_FOUND = "NotFoundError"
    CONFLICT = "ConflictError"
    INTERNAL = "InternalError"


@dataclass(slots=True, eq=False)
class DomainError(Exception):
    """Business-rule failure tagged with an explicit :class:`ErrorKind`.

    Boundaries map errors by ``kind``; the concrete subclass is only a
    convenience for raising and catching.
    """

    kind: ErrorKind
    message: str
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.kind.value, "message": self.message}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class _FixedKindError(DomainError):
    fixed_kind: ClassVar[ErrorKind]
    default_message: ClassVar[str]

    def __init__(
        self,
        message: str | None = None,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        DomainError.__init__(
            self,
            kind=self.fixed_kind,
            message=message or self.default_message,
            context=context,
        )


class ValidationError(_FixedKindError):
    fixed_kind = ErrorKind.VALIDATION
    default_message = "Validation failed"


class AuthenticationError(_FixedKindError):
    fixed_kind = ErrorKind.AUTHENTICATION
    default_message = "Authentication failed"


class AuthorizationError(_FixedKindError):
    fixed_kind = ErrorKind.AUTHORIZATION
    default_message = "Not authorized"


class NotFoundError(_FixedKindError):
    fixed_kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found"


class ConflictError(_FixedKindError):
    fixed_kind = ErrorKind.CONFLICT
    default_message = "Resource already exists"


class InternalError(_FixedKindError):
    fixed_kind = ErrorKind.INTERNAL
    default_message = "Internal server error"


__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "DomainError",
    "ErrorKind",
    "InternalError",
    "NotFoundError",
    "ValidationError",
]
