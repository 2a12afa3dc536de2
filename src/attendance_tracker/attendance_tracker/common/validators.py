from __future__ import annotations

import math

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_non_negative_int(value: object, field_name: str) -> int:
    """Accept ints, integral floats and numeric strings; reject everything else."""

    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be a non-negative number")

    if isinstance(value, str):
        text = value.strip()
        try:
            value = float(text) if text else None
        except ValueError:
            value = None
        if value is None:
            raise ValidationError(f"{field_name} must be a non-negative number")

    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value) or not value.is_integer():
            raise ValidationError(f"{field_name} must be a non-negative number")
        value = int(value)

    if not isinstance(value, int) or value < 0:
        raise ValidationError(f"{field_name} must be a non-negative number")
    return value
