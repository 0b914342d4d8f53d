# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from datetime import UTC

from sqlalchemy import select
from sqlalchemy.exc import DisconnectionError, IntegrityError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from authservice.domain.users.entities import NewUser
from authservice.domain.users.entities import User as DomainUser
from authservice.domain.users.normalization import normalize_email
from authservice.domain.users.repositories import UserRepository
from authservice.infrastructure.db.models import UserRecord
from authservice.infrastructure.db.session import Database
from authservice.shared.errors.storage import (
    ConnectionFailure,
    DuplicateEntry,
    EntityNotFound,
    QueryFailure,
    RepositoryError,
)
from authservice.shared.logging import logger

_USER_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")
_UNIQUE_MARKERS = ("unique", "duplicate")


def _is_unique_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig or exc).lower()
    return any(marker in message for marker in _UNIQUE_MARKERS)


def _translate(exc: SQLAlchemyError, action: str) -> RepositoryError:
    if isinstance(exc, IntegrityError) and _is_unique_violation(exc):
        return DuplicateEntry("User with this email already exists")
    if isinstance(exc, (DisconnectionError, PoolTimeoutError)) or getattr(
        exc, "connection_invalidated", False
    ):
        logger.error(f"users.{action}: lost database connection ({type(exc).__name__})")
        return ConnectionFailure()
    logger.error(f"users.{action}: query failed ({type(exc).__name__})")
    return QueryFailure(f"Failed to {action} user")


def _to_domain(row: UserRecord) -> DomainUser:
    created_at = row.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    return DomainUser(
        id=row.id,
        name=row.name,
        email=row.email,
        hashed_password=row.hashed_password,
        created_at=created_at,
        role=row.role,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    def create(self, user: NewUser) -> DomainUser:
        try:
            with self._db.session_scope() as session:
                row = UserRecord(
                    name=user.name,
                    email=normalize_email(user.email),
                    hashed_password=user.hashed_password,
                    role=user.role,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except SQLAlchemyError as exc:
            raise _translate(exc, "create") from exc

    def find_by_email(self, email: str) -> DomainUser | None:
        try:
            with self._db.session_scope() as session:
                row = session.scalars(
                    select(UserRecord).where(UserRecord.email == normalize_email(email))
                ).first()
                if not row:
                    return None
                return _to_domain(row)
        except SQLAlchemyError as exc:
            raise _translate(exc, "find") from exc

    def find_by_id(self, user_id: str) -> DomainUser:
        if not isinstance(user_id, str) or not _USER_ID_PATTERN.match(user_id):
            raise QueryFailure(f"Invalid user id format: {user_id!r}")
        try:
            with self._db.session_scope() as session:
                row = session.get(UserRecord, user_id)
                if not row:
                    raise EntityNotFound("User", user_id)
                return _to_domain(row)
        except SQLAlchemyError as exc:
            raise _translate(exc, "find") from exc
