import math
from stockroom.core.errors import ValidationError


def require_name(name, label: str) -> str:
    """Returns the trimmed name, rejecting blanks."""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"{label} name must not be empty.")
    return name.strip()


def require_finite(value, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValidationError(f"{label} must be a finite number.")
    return value


def require_number(value, label: str, allow_zero: bool = True) -> float:
    """Rejects non-numbers, NaN/inf, negatives, and zero unless allowed."""
    value = require_finite(value, label)
    if value < 0 or (value == 0 and not allow_zero):
        bound = "zero or more" if allow_zero else "greater than zero"
        raise ValidationError(f"{label} must be {bound}, got {value}.")
    return value
