# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError


def format_pydantic_error(error: Any) -> dict[str, Any]:
    loc = error.get("loc", ())
    field_path = ".".join(str(part) for part in loc if part is not None)
    entry: dict[str, Any] = {
        "field": field_path or "__root__",
        "type": error.get("type", "value_error"),
    }
    return entry


def first_error(exc: PydanticValidationError) -> tuple[str, dict[str, Any]]:
    """Message and location of the first rule that failed.

    Pydantic reports field errors in declaration order, and model-level
    validators only run once every field passed, so the first entry is the
    first violated rule.
    """
    errors = exc.errors(include_url=False)
    if not errors:
        return "Validation failed", {}
    error = errors[0]
    return str(error.get("msg") or "Validation failed"), format_pydantic_error(error)


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    message, context = first_error(exc)
    raise ValidationError(message, context=context) from exc


__all__ = [
    "first_error",
    "format_pydantic_error",
    "raise_validation_error",
]
