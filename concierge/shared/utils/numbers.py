"""Numeric coercion for loosely-typed document fields."""

import math
from typing import Any


def to_float(value: Any, default: float = 0.0) -> float:
    """Coerce numbers and numeric strings to float; anything else gives default.

    Falsy values (None, '', 0) give default as well, matching how stored
    amounts treat a missing field and a zero the same way.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value) if not math.isnan(value) else default
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return default
        return parsed if not math.isnan(parsed) else default
    return default


def first_amount(*values: Any) -> float:
    """Return the first truthy numeric value (0 if none): `a || b || 0` semantics."""
    for value in values:
        number = to_float(value)
        if number:
            return number
    return 0.0


def first_number(*values: Any) -> float | None:
    """Return the first value that is an actual number (zero included), else None."""
    for value in values:
        if isinstance(value, bool):
            continue
        if isinstance(value, (int, float)) and not math.isnan(value):
            return float(value)
    return None


def to_int(value: Any, default: int = 0) -> int:
    """Integer coercion for counts (adults, quantity). Non-numeric gives default."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    number = to_float(value, default=float("nan"))
    if math.isnan(number):
        return default
    return int(number)
