from __future__ import annotations

from datetime import date
from typing import Any

from ..core.exceptions import ValidationError


def require_positive_int(value: Any, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if number <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return number


def require_non_negative(value: Any, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return number


def require_date_range(start: date, end: date, *, max_days: int | None = None) -> None:
    if end < start:
        raise ValidationError("End date must not be before start date")
    if max_days is not None and (end - start).days + 1 > max_days:
        raise ValidationError(f"Date range is limited to {max_days} days")
