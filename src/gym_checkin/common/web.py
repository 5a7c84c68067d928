from __future__ import annotations

import logging
from functools import wraps
from typing import Callable

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    DuplicateOpenSessionError,
    InconsistentStateError,
    InvalidCredentialError,
    StoreUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[DomainError], int] = {
    ValidationError: 400,
    InvalidCredentialError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    InconsistentStateError: 409,
    DuplicateOpenSessionError: 409,
    StoreUnavailableError: 503,
}


def status_for(error: DomainError) -> int:
    for cls in type(error).__mro__:
        if cls in _STATUS_BY_ERROR:
            return _STATUS_BY_ERROR[cls]
    return 400


def error_payload(error: DomainError) -> dict:
    payload = {
        "success": False,
        "error": error.kind,
        "message": str(error),
        "retryable": error.retryable,
    }
    if isinstance(error, InconsistentStateError) and error.open_session is not None:
        payload["open_session"] = error.open_session.to_dict()
    return payload


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        status = status_for(error)
        if status >= 500 or isinstance(error, InconsistentStateError):
            logger.error("%s %s failed: %s (%s)", request.method, request.path, error, error.kind)
        return jsonify(error_payload(error)), status

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        if isinstance(error, HTTPException):
            return jsonify({"success": False, "error": "http_error", "message": error.description}), error.code
        logger.exception("%s %s crashed", request.method, request.path)
        return jsonify({"success": False, "error": "internal_error", "message": "Internal server error"}), 500


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def caller_required(access) -> Callable:
    """Resolve the caller once from the Flask session and pass it as `caller`."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            kwargs["caller"] = access.current_caller(session)
            return view(*args, **kwargs)

        return wrapper

    return decorator
