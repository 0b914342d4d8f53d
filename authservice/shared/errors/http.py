# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import traceback
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from authservice.shared.logging import logger

from .base import DomainError, ErrorKind

STATUS_BY_KIND: dict[ErrorKind, HTTPStatus] = {
    ErrorKind.VALIDATION: HTTPStatus.BAD_REQUEST,
    ErrorKind.AUTHENTICATION: HTTPStatus.UNAUTHORIZED,
    ErrorKind.AUTHORIZATION: HTTPStatus.FORBIDDEN,
    ErrorKind.NOT_FOUND: HTTPStatus.NOT_FOUND,
    ErrorKind.CONFLICT: HTTPStatus.CONFLICT,
    ErrorKind.INTERNAL: HTTPStatus.INTERNAL_SERVER_ERROR,
}

INTERNAL_ERROR_BODY = {"error": "InternalServerError", "message": "Internal server error"}


def status_for(kind: ErrorKind) -> HTTPStatus:
    return STATUS_BY_KIND.get(kind, HTTPStatus.INTERNAL_SERVER_ERROR)


def _body_shape() -> Any:
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return sorted(payload.keys())
    return type(payload).__name__


def _internal_error(exc: BaseException, *, expose: bool) -> tuple[Response, HTTPStatus]:
    body: dict[str, Any] = dict(INTERNAL_ERROR_BODY)
    if expose:
        body["detail"] = str(exc)
        body["traceback"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return jsonify(body), HTTPStatus.INTERNAL_SERVER_ERROR


def handle_domain_error(error: DomainError, *, expose: bool = False) -> tuple[Response, HTTPStatus]:
    status = status_for(error.kind)
    if status is HTTPStatus.INTERNAL_SERVER_ERROR:
        return _internal_error(error, expose=expose)
    return jsonify(error.to_dict()), status


def register_error_handler(app: Flask, *, expose_internal_errors: bool = False) -> None:
    @app.errorhandler(DomainError)
    def _handle_domain_error(exc: DomainError):
        if exc.kind is ErrorKind.INTERNAL:
            logger.opt(exception=exc).error(
                f"Internal error on {request.method} {request.path}: {exc.message} "
                f"body_shape={_body_shape()}"
            )
        else:
            logger.warning(
                f"Handled {exc.kind.value} on {request.method} {request.path}: {exc.message}"
            )
        return handle_domain_error(exc, expose=expose_internal_errors)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        name = (exc.name or "HTTPError").replace(" ", "")
        response = jsonify({"error": name, "message": exc.description})
        return response, exc.code or HTTPStatus.INTERNAL_SERVER_ERROR

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        logger.opt(exception=exc).error(
            f"Unhandled exception: {type(exc).__name__} on {request.method} {request.path} "
            f"body_shape={_body_shape()}"
        )
        return _internal_error(exc, expose=expose_internal_errors)


__all__ = [
    "INTERNAL_ERROR_BODY",
    "STATUS_BY_KIND",
    "handle_domain_error",
    "register_error_handler",
    "status_for",
]
