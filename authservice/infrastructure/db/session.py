# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from authservice.shared.config import DatabaseConfig
from authservice.shared.errors.storage import ConnectionFailure
from authservice.shared.logging import logger


class Base(DeclarativeBase):
    pass


def _is_in_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


class Database:
    """Long-lived handle on the user store: one engine, one session factory.

    Created once by the composition root and passed to repositories.
    """

    def __init__(self, config: DatabaseConfig) -> None:
        self._url = config.url

        engine_kwargs: dict[str, Any] = {}
        connect_args: dict[str, object] = {}
        if config.url.startswith("sqlite"):
            connect_args = {
                "check_same_thread": False,
                "timeout": int(config.pool_timeout),
            }
            if _is_in_memory_sqlite(config.url):
                # Every session must see the same in-memory database.
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_timeout"] = config.pool_timeout

        self.engine: Engine = create_engine(
            config.url,
            echo=config.echo,
            pool_pre_ping=True,
            connect_args=connect_args,
            **engine_kwargs,
        )
        self._sessions = scoped_session(
            sessionmaker(bind=self.engine, autoflush=False, autocommit=False, expire_on_commit=False)
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        session = self._sessions()
        logger.debug("db.session: opened scoped session")
        try:
            yield session
            session.commit()
            logger.debug("db.session: committed scoped session")
        except Exception as exc:
            logger.warning(f"db.session: {type(exc).__name__}, rolling back")
            session.rollback()
            raise
        finally:
            session.close()
            self._sessions.remove()
            logger.debug("db.session: closed scoped session")

    def create_all(self) -> None:
        from authservice.infrastructure.db import models  # noqa: F401

        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as exc:
            raise ConnectionFailure(f"Could not prepare schema: {type(exc).__name__}") from exc
        logger.info("Database schema ensured")

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def ping(self) -> None:
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise ConnectionFailure() from exc

    def dispose(self) -> None:
        self._sessions.remove()
        self.engine.dispose()
        logger.info("Database connections closed")
