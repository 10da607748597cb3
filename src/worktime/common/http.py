from __future__ import annotations

import logging
from datetime import time
from typing import Any, Optional

from flask import jsonify, request

from ..core.exceptions import (
    DomainError,
    LookupUnavailable,
    PolicyConfigMissing,
    StoreUnavailable,
    ValidationError,
)
from .datetime_utils import parse_time_of_day

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (ValidationError, 400),
    (LookupUnavailable, 503),
    (PolicyConfigMissing, 503),
    (StoreUnavailable, 503),
)


def error_response(exc: DomainError):
    status = next((code for cls, code in STATUS_BY_ERROR if isinstance(exc, cls)), 500)
    if status >= 500:
        logger.error("Request failed: %s", exc)
    return jsonify({"success": False, "error": type(exc).__name__, "message": str(exc)}), status


def internal_error():
    logger.exception("Unexpected error while handling request")
    return jsonify({"success": False, "error": "InternalError", "message": "Internal server error"}), 500


def require_json() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def optional_time(data: dict, key: str) -> Optional[time]:
    value = data.get(key)
    return parse_time_of_day(str(value)) if value not in (None, "") else None


def optional_bool(data: dict, key: str) -> Optional[bool]:
    value: Any = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ValidationError(f"{key} must be true or false")
    return value
