from __future__ import annotations

import math
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def coerce_number(value: Any) -> Optional[float]:
    """Numeric coercion that never raises.

    Returns None for missing, non-numeric, NaN or infinite values.
    Booleans are not numbers here.
    """

    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def require_number(value: Any, field_name: str) -> float:
    number = coerce_number(value)
    if number is None:
        raise ValidationError(f"{field_name} must be a number")
    return number
