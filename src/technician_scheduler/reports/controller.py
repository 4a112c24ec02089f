from __future__ import annotations

import csv
import io
import logging

import pandas as pd
from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import parse_optional_date
from ..common.http import error_response, internal_error
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from .service import ReportData

logger = logging.getLogger(__name__)

ROW_FIELDS = ["work_date", "job_code", "technician_code", "technician_name", "initials", "is_leader"]
SUMMARY_FIELDS = ["technician_code", "technician_name", "days_worked", "days_as_leader"]


def register(app: Flask, container: Container) -> None:
    def _write_report_csv(*, data: ReportData, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=ROW_FIELDS)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    def _write_report_xlsx(*, data: ReportData, filename: str):
        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            pd.DataFrame(data.rows, columns=ROW_FIELDS).to_excel(writer, index=False, sheet_name="Harian")
            pd.DataFrame(data.summary, columns=SUMMARY_FIELDS).to_excel(writer, index=False, sheet_name="Ringkasan")

        output.seek(0)
        return send_file(
            output,
            download_name=filename,
            as_attachment=True,
            mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )

    @app.route("/api/reports/man-days/<path:job_code>", methods=["GET"], endpoint="api_man_day_report")
    def api_man_day_report(job_code: str):
        try:
            fmt = (request.args.get("format") or "json").strip().lower()
            if fmt not in {"json", "csv", "xlsx"}:
                raise ValidationError("Format harus json, csv atau xlsx")

            start = parse_optional_date(request.args.get("start"))
            end = parse_optional_date(request.args.get("end"))
            data = container.report_service.build_project_report(job_code=job_code, start=start, end=end)

            safe_code = "".join(ch if ch.isalnum() or ch in "-_" else "_" for ch in data.project.job_code)
            if fmt == "csv":
                return _write_report_csv(data=data, filename=f"man_days_{safe_code}.csv")
            if fmt == "xlsx":
                return _write_report_xlsx(data=data, filename=f"man_days_{safe_code}.xlsx")

            return jsonify(
                {
                    "jobCode": data.project.job_code,
                    "projectName": data.project.name,
                    "rows": data.rows,
                    "summary": data.summary,
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error(logger, "GET /api/reports/man-days")
