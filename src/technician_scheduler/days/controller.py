from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_optional_date
from ..common.http import error_response, internal_error
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/days/current", methods=["GET"], endpoint="api_current_day")
    def api_current_day():
        try:
            latest = container.day_service.latest_opened()
            return jsonify(
                {
                    "date": container.day_service.current_date().isoformat(),
                    "timezone": container.clock.timezone,
                    "cutoffMinutes": container.clock.cutoff_minutes,
                    "lastOpened": latest.isoformat() if latest else None,
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error(logger, "GET /api/days/current")

    @app.route("/api/days/advance", methods=["POST"], endpoint="api_advance_day")
    def api_advance_day():
        try:
            data = request.get_json(silent=True) or {}
            result = container.day_service.advance(parse_optional_date(data.get("date")))
            return jsonify({"ok": True, "date": result.business_date.isoformat(), "advanced": result.advanced})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error(logger, "POST /api/days/advance")
