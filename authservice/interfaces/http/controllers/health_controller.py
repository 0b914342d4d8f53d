# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime
from http import HTTPStatus

from flask import Blueprint, Response, jsonify

from authservice.infrastructure.db.session import Database
from authservice.infrastructure.health import check_database


class HealthController:
    def __init__(self, *, database: Database) -> None:
        self._database = database

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("health", __name__)
        bp.add_url_rule("/health", view_func=self.health, methods=["GET"])
        return bp

    def health(self) -> tuple[Response, HTTPStatus]:
        database_up = check_database(self._database)
        status: dict[str, object] = {
            "status": "ok" if database_up else "error",
            "timestamp": datetime.now(UTC).isoformat(),
            "services": {"database": "up" if database_up else "down"},
        }
        code = HTTPStatus.OK if database_up else HTTPStatus.SERVICE_UNAVAILABLE
        return jsonify(status), code
