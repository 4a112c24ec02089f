from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_date
from ..common.http import date_arg, error_response, internal_error, json_body
from ..core.exceptions import DomainError
from ..container import Container
from .model import Project, ProjectBoardRow

logger = logging.getLogger(__name__)


def project_json(p: Project) -> dict:
    return {
        "projectId": p.project_id,
        "jobCode": p.job_code,
        "name": p.name,
        "location": p.location,
        "startDate": p.start_date.isoformat(),
        "deadline": p.deadline.isoformat() if p.deadline else None,
        "sigmaTeknisi": p.sigma_teknisi,
        "sigmaHari": p.sigma_hari,
        "sigmaManDays": p.sigma_man_days,
        "status": p.status.value,
        "projectStatus": p.project_status.value,
        "pendingReason": p.pending_reason,
        "pendingSince": p.pending_since.isoformat() if p.pending_since else None,
        "closedAt": p.closed_at.isoformat() if p.closed_at else None,
    }


def board_row_json(row: ProjectBoardRow) -> dict:
    data = project_json(row.project)
    data.update(
        {
            "daysElapsed": row.days_elapsed,
            "progressStatus": row.progress_status.value,
            "actualManDays": row.actual_man_days,
            "manDaysStatus": row.man_days_status.value,
            "memberCount": row.member_count,
            "leaderCount": row.leader_count,
        }
    )
    return data


def register(app: Flask, container: Container) -> None:
    @app.route("/api/projects", methods=["GET"], endpoint="api_projects")
    def api_projects():
        try:
            on_date = date_arg("date", container.day_service.current_date)
            rows = container.project_service.list_board(on_date=on_date)
            return jsonify({"date": on_date.isoformat(), "projects": [board_row_json(r) for r in rows]})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error(logger, "GET /api/projects")

    @app.route("/api/projects", methods=["POST"], endpoint="api_create_project")
    def api_create_project():
        try:
            data = json_body()
            project = container.project_service.create_project(
                name=data.get("name", ""),
                job_code=data.get("jobCode", ""),
                location=data.get("location"),
                start_date=parse_iso_date(data.get("startDate") or ""),
                deadline=parse_iso_date(data.get("deadline") or ""),
                sigma_teknisi=data.get("sigmaTeknisi", 0),
                sigma_hari=data.get("sigmaHari", 0),
                sigma_man_days=data.get("sigmaManDays", 0),
            )
            return jsonify(project_json(project)), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error(logger, "POST /api/projects")

    @app.route("/api/projects/<int:project_id>", methods=["GET"], endpoint="api_project_detail")
    def api_project_detail(project_id: int):
        try:
            on_date = date_arg("date", container.day_service.current_date)
            return jsonify(board_row_json(container.project_service.describe(project_id, on_date=on_date)))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error(logger, "GET /api/projects/<id>")

    @app.route("/api/projects/by-job-code/<path:job_code>", methods=["GET"], endpoint="api_project_by_job_code")
    def api_project_by_job_code(job_code: str):
        try:
            return jsonify(project_json(container.project_service.find_by_job_code(job_code)))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error(logger, "GET /api/projects/by-job-code")

    @app.route("/api/projects/<int:project_id>/status", methods=["PUT", "POST"], endpoint="api_project_status")
    def api_project_status(project_id: int):
        try:
            data = json_body()
            project = container.project_service.set_status(
                project_id=project_id,
                status=data.get("status", ""),
                reason=data.get("reason", data.get("pendingReason")),
            )
            return jsonify({"ok": True, "project": project_json(project)})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error(logger, "PUT /api/projects/<id>/status")
