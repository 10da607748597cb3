from __future__ import annotations

import csv
import io
from datetime import date, timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import error_response, internal_error, optional_bool, optional_time, require_json
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.enums import WorkStatus
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from ..reports.service import REPORT_COLUMNS
from .service import FIGURE_FIELDS


def register(app: Flask, container: Container) -> None:
    def _range_from_args() -> tuple[date, date]:
        end_s = request.args.get("end")
        start_s = request.args.get("start")
        end = parse_iso_date(end_s) if end_s else date.today()
        start = parse_iso_date(start_s) if start_s else end - timedelta(days=DEFAULT_REPORT_DAYS - 1)
        return start, end

    def _write_report_csv(*, data, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=REPORT_COLUMNS)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/summaries/<int:user_id>", methods=["GET"], endpoint="api_list_summaries")
    def api_list_summaries(user_id: int):
        try:
            start, end = _range_from_args()
            rows = container.summary_service.list_for_user(user_id, start=start, end=end)
            report = container.report_service.build_report(start=start, end=end, user_id=user_id)
            return jsonify(
                {
                    "success": True,
                    "start": start.isoformat(),
                    "end": end.isoformat(),
                    "summaries": [s.to_dict() for s in rows],
                    "totals": report.summary[0] if report.summary else None,
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error()

    @app.route("/api/summaries/<int:user_id>/report.csv", methods=["GET"], endpoint="api_summaries_csv")
    def api_summaries_csv(user_id: int):
        try:
            start, end = _range_from_args()
            data = container.report_service.build_report(start=start, end=end, user_id=user_id)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error()

        filename = f"worktime_{user_id}_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return _write_report_csv(data=data, filename=filename)

    @app.route(
        "/api/summaries/<int:user_id>/<work_date>/recompute",
        methods=["POST"],
        endpoint="api_recompute_summary",
    )
    def api_recompute_summary(user_id: int, work_date: str):
        try:
            force = request.args.get("force", "").lower() in {"1", "true", "yes"}
            summary = container.orchestrator.recalculate(user_id, parse_iso_date(work_date), force=force)
            return jsonify({"success": True, "summary": summary.to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error()

    @app.route("/api/summaries/<int:user_id>/<work_date>", methods=["PUT"], endpoint="api_override_summary")
    def api_override_summary(user_id: int, work_date: str):
        try:
            data = require_json()
            figures = {k: data[k] for k in FIGURE_FIELDS if k in data}
            if not figures:
                raise ValidationError("At least one hour figure is required")

            status = data.get("work_status_tag")
            try:
                status_tag = WorkStatus(status) if status else None
            except ValueError:
                raise ValidationError(f"Unknown work_status_tag: {status!r}")

            summary = container.summary_service.override(
                user_id,
                parse_iso_date(work_date),
                figures=figures,
                work_status_tag=status_tag,
                check_in_time=optional_time(data, "check_in_time"),
                check_out_time=optional_time(data, "check_out_time"),
                notes=data.get("notes"),
            )
            return jsonify({"success": True, "summary": summary.to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error()

    @app.route(
        "/api/summaries/<int:user_id>/recompute-range",
        methods=["POST"],
        endpoint="api_recompute_range",
    )
    def api_recompute_range(user_id: int):
        try:
            data = require_json()
            start = parse_iso_date(str(data.get("start", "")))
            end = parse_iso_date(str(data.get("end", "")))
            force = bool(optional_bool(data, "force"))
            summaries = container.orchestrator.recalculate_range(user_id, start, end, force=force)
            return jsonify({"success": True, "count": len(summaries), "summaries": [s.to_dict() for s in summaries]})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error()
