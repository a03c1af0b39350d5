from __future__ import annotations

import math
from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    if len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a number")
    return number


def require_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    if isinstance(value, float):
        # Integral floats only: 15.0 passes, 15.9 is rejected.
        if not value.is_integer():
            raise ValidationError(f"{field_name} must be an integer")
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
