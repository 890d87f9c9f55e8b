"""
Type converters — shared value conversion utilities.
Version: 1.0.0
"""
import math
from typing import Any


def to_number(value: Any) -> float:
    """
    Coerce a raw catalog value to a number.

    None, empty strings and non-numeric values become 0.0 so that callers
    can treat them the same as an explicit zero. NaN is also mapped to 0.0.
    """
    if value is None:
        return 0.0
    if isinstance(value, str) and not value.strip():
        return 0.0
    try:
        number = float(value)
    except (ValueError, TypeError):
        return 0.0
    if math.isnan(number):
        return 0.0
    return number
