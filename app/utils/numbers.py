import math
from typing import Any


def parse_int(value: Any) -> int | None:
    """
    Parse an integer from provider payload values.

    Returns None for None, empty strings, booleans and anything that is not a
    whole number ("3", " 12 ", 4 and 4.0 parse; "3abc", "1.5", "" do not).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            return None
    return None


def parse_score(value: Any) -> int | None:
    """Parse a score; negative or unparseable values mean "not played"."""
    number = parse_int(value)
    if number is None or number < 0:
        return None
    return number


def to_finite_float(value: object) -> float | None:
    """Convert numeric-like values to finite float; return None for NaN/inf/invalid."""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None
