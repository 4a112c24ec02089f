from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import as_bool, date_arg, error_response, internal_error, json_body
from ..common.validators import require_positive_id
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from .model import SelectionItem

logger = logging.getLogger(__name__)


def parse_items(raw) -> list[SelectionItem]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValidationError("items harus berupa list")

    items: list[SelectionItem] = []
    for entry in raw:
        if not isinstance(entry, dict):
            raise ValidationError("Item assignment tidak valid")
        items.append(
            SelectionItem(
                project_id=require_positive_id(entry.get("projectId"), "projectId"),
                technician_id=require_positive_id(entry.get("technicianId"), "technicianId"),
                is_selected=as_bool(entry.get("isSelected", True)),
                is_leader=as_bool(entry.get("isLeader", entry.get("isProjectLeader", False))),
            )
        )
    return items


def register(app: Flask, container: Container) -> None:
    @app.route("/api/assignments", methods=["GET"], endpoint="api_assignments")
    def api_assignments():
        try:
            on_date = date_arg("date", container.day_service.current_date)
            cells = container.assignment_service.get_effective_assignments(on_date=on_date)
            return jsonify(
                {
                    "date": on_date.isoformat(),
                    "assignments": [
                        {
                            "projectId": c.project_id,
                            "technicianId": c.technician_id,
                            "technicianCode": c.technician_code,
                            "initials": c.initials,
                            "isSelected": c.is_selected,
                            "isLeader": c.is_leader,
                        }
                        for c in cells
                    ],
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error(logger, "GET /api/assignments")

    @app.route("/api/assignments", methods=["POST"], endpoint="api_submit_assignments")
    def api_submit_assignments():
        try:
            data = json_body()
            raw_date = data.get("date")
            on_date = parse_iso_date(raw_date) if raw_date else container.day_service.current_date()

            scope = data.get("projectScope")
            if scope is not None:
                if not isinstance(scope, list):
                    raise ValidationError("projectScope harus berupa list")
                scope = [require_positive_id(p, "projectScope") for p in scope]

            result = container.assignment_service.submit_assignments(
                on_date=on_date,
                items=parse_items(data.get("items")),
                project_scope=scope,
            )
            return jsonify(
                {
                    "date": on_date.isoformat(),
                    "appliedCount": result.applied_count,
                    "appliedByProject": {str(k): v for k, v in result.applied_by_project.items()},
                    "skipped": {str(k): v.value for k, v in result.skipped.items()},
                    "skippedPairs": result.skipped_pairs,
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error(logger, "POST /api/assignments")

    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance")
    def api_attendance():
        try:
            on_date = date_arg("date", container.day_service.current_date)
            project_id = request.args.get("projectId")
            project_ids = [require_positive_id(project_id, "projectId")] if project_id else None

            rows = container.attendance_ledger.get_attendance(on_date=on_date, project_ids=project_ids)
            return jsonify(
                {
                    "date": on_date.isoformat(),
                    "attendance": [
                        {
                            "projectId": r.project_id,
                            "technicianId": r.technician_id,
                            "date": r.work_date.isoformat(),
                            "isLeader": r.is_leader,
                        }
                        for r in rows
                    ],
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error(logger, "GET /api/attendance")
