# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from logopass.shared.logging import logger

from .base import AppError, envelope, message_for


def _route() -> str:
    # the matched rule keeps path tokens out of the log
    rule = request.url_rule
    return f"{request.method} {rule.rule if rule is not None else request.path}"


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    return jsonify(error.to_envelope()), error.status


def register_error_handler(
    app: Flask,
    *,
    debug_mode: bool = False,
    default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
) -> None:
    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        if exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            logger.error(f"http.error: {exc.code} on {_route()}")
        else:
            logger.warning(f"http.error: {exc.code} on {_route()}")
        if debug_mode and exc.context:
            logger.debug(f"http.error: context={dict(exc.context)}")
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        if debug_mode:
            logger.exception(f"Unhandled exception: {_route()} body_size={len(request.data)}")
        else:
            logger.error(f"Error: {type(exc).__name__} on {_route()}")
        body = envelope(success=False, message=message_for("internal_error"))
        return jsonify(body), default_status
