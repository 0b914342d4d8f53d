# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, jsonify, request

from authservice.application.use_cases.users.login_user import LoginUserUseCase
from authservice.application.use_cases.users.register_user import RegisterUserUseCase


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        url_prefix: str = "/api/v1",
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._url_prefix = url_prefix

    def register(self) -> tuple[Response, HTTPStatus]:
        user = self._register_use_case.execute(request.get_json(silent=True))
        return jsonify(user), HTTPStatus.CREATED

    def login(self) -> tuple[Response, HTTPStatus]:
        result = self._login_use_case.execute(request.get_json(silent=True))
        return jsonify(result), HTTPStatus.OK

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix=self._url_prefix or None)
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        return bp
