# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Storage-layer failures raised by repositories.

These never reach the HTTP boundary: use cases translate them into
:mod:`authservice.shared.errors.base` kinds.
"""

from __future__ import annotations


class RepositoryError(Exception):
    default_message = "Repository error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ConnectionFailure(RepositoryError):
    default_message = "Database connection failed"


class QueryFailure(RepositoryError):
    default_message = "Query execution failed"


class DuplicateEntry(RepositoryError):
    default_message = "Entry already exists"


class EntityNotFound(RepositoryError):
    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


__all__ = [
    "ConnectionFailure",
    "DuplicateEntry",
    "EntityNotFound",
    "QueryFailure",
    "RepositoryError",
]
