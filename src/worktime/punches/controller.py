from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_date, parse_time_of_day
from ..common.http import error_response, internal_error, optional_bool, optional_time, require_json
from ..core.enums import PunchKind
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from .service import PunchResult


def _result_json(result: PunchResult, status: int = 200):
    return jsonify(
        {
            "success": True,
            "punch_id": result.punch_id,
            "summaries": [s.to_dict() for s in result.summaries],
        }
    ), status


def register(app: Flask, container: Container) -> None:
    @app.route("/api/punches", methods=["POST"], endpoint="api_record_punch")
    def api_record_punch():
        try:
            data = require_json()
            try:
                kind = PunchKind(str(data.get("kind", "")))
            except ValueError:
                raise ValidationError("kind must be check_in or check_out")

            result = container.punch_service.record_punch(
                user_id=data.get("user_id"),
                work_date=parse_iso_date(str(data.get("work_date", ""))),
                time_of_day=parse_time_of_day(str(data.get("time", ""))),
                kind=kind,
                had_dinner=bool(optional_bool(data, "had_dinner")),
                is_manual=bool(optional_bool(data, "is_manual")),
            )
            return _result_json(result, 201)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error()

    @app.route("/api/punches/<int:punch_id>", methods=["PUT"], endpoint="api_correct_punch")
    def api_correct_punch(punch_id: int):
        try:
            data = require_json()
            work_date = data.get("work_date")
            result = container.punch_service.correct_punch(
                punch_id,
                work_date=parse_iso_date(str(work_date)) if work_date else None,
                time_of_day=optional_time(data, "time"),
                had_dinner=optional_bool(data, "had_dinner"),
            )
            return _result_json(result)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error()

    @app.route("/api/punches/<int:punch_id>", methods=["DELETE"], endpoint="api_delete_punch")
    def api_delete_punch(punch_id: int):
        try:
            return _result_json(container.punch_service.delete_punch(punch_id))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error()
