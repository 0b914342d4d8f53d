# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authservice.infrastructure.db.session import Database
from authservice.shared.errors.storage import ConnectionFailure
from authservice.shared.logging import logger


def check_database(database: Database) -> bool:
    try:
        database.ping()
    except ConnectionFailure as exc:
        logger.warning(f"health: database ping failed ({exc.__cause__!r})")
        return False
    return True


__all__ = ["check_database"]
