from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from flask import jsonify, request

from ..core.exceptions import ConflictError, DomainError, NotFoundError, PersistenceError, ValidationError
from .datetime_utils import parse_iso_date

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (ConflictError, 409),
    (PersistenceError, 503),
)


def error_response(e: DomainError):
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(e, error_type):
            return jsonify({"error": str(e)}), status
    return jsonify({"error": str(e)}), 400


def internal_error(logger: logging.Logger, what: str):
    logger.exception("Unexpected error: %s", what)
    return jsonify({"error": "Kesalahan sistem"}), 500


def as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "ya"}
    return bool(value)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Body JSON tidak valid")
    return data


def date_arg(name: str, default: Callable[[], date]) -> date:
    value: Optional[str] = request.args.get(name)
    if not value:
        return default()
    return parse_iso_date(value)
