from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.http import error_response, internal_error, json_body
from ..core.exceptions import DomainError
from ..container import Container
from .model import Technician

logger = logging.getLogger(__name__)


def technician_json(t: Technician) -> dict:
    return {
        "technicianId": t.technician_id,
        "code": t.code,
        "name": t.name,
        "initials": t.display_initials,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/technicians", methods=["GET"], endpoint="api_technicians")
    def api_technicians():
        try:
            techs = container.technician_service.list_technicians()
            return jsonify({"technicians": [technician_json(t) for t in techs]})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error(logger, "GET /api/technicians")

    @app.route("/api/technicians", methods=["POST"], endpoint="api_create_technician")
    def api_create_technician():
        try:
            data = json_body()
            tech = container.technician_service.create_technician(
                code=data.get("code", ""),
                name=data.get("name", ""),
                initials=data.get("initials"),
            )
            return jsonify(technician_json(tech)), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error(logger, "POST /api/technicians")

    @app.route("/api/technicians/<int:technician_id>", methods=["PUT"], endpoint="api_update_technician")
    def api_update_technician(technician_id: int):
        try:
            data = json_body()
            tech = container.technician_service.update_technician(
                technician_id=technician_id,
                name=data.get("name", ""),
                initials=data.get("initials"),
            )
            return jsonify(technician_json(tech))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error(logger, "PUT /api/technicians/<id>")

    @app.route("/api/technicians/<int:technician_id>", methods=["DELETE"], endpoint="api_delete_technician")
    def api_delete_technician(technician_id: int):
        try:
            container.technician_service.delete_technician(technician_id)
            return jsonify({"ok": True})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error(logger, "DELETE /api/technicians/<id>")

    @app.route("/api/technicians/jobs", methods=["GET"], endpoint="api_technician_jobs")
    def api_technician_jobs():
        try:
            tech = container.technician_service.resolve(request.args.get("technician", ""))
            jobs = container.technician_service.list_jobs(tech)
            return jsonify(
                {
                    "technician": technician_json(tech),
                    "jobs": [
                        {
                            "projectId": j.project_id,
                            "jobCode": j.job_code,
                            "name": j.project_name,
                            "location": j.location,
                            "status": j.ui_status.value,
                            "isLeader": j.is_leader,
                            "progress": j.crew_progress,
                            "crew": list(j.crew),
                        }
                        for j in jobs
                    ],
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error(logger, "GET /api/technicians/jobs")

    @app.route("/api/technicians/idle", methods=["GET"], endpoint="api_idle_technicians")
    def api_idle_technicians():
        try:
            techs = container.technician_service.list_idle()
            return jsonify({"technicians": [technician_json(t) for t in techs]})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error(logger, "GET /api/technicians/idle")
