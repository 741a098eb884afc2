"""Unit conversion and rounding helpers for incoming measurements."""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Sequence

DEGREES_PER_RADIAN = 57.2958
KELVIN_OFFSET = 273.15


def radians_to_degrees(rad: float) -> float:
    """Convert an angle in radians to degrees."""
    return rad * DEGREES_PER_RADIAN


def kelvin_to_celsius(deg: float) -> float:
    """Convert a temperature in kelvin to degrees celsius."""
    return deg - KELVIN_OFFSET


def round_half_up(value: float, places: int = 0) -> float:
    """Round to a number of decimal places, ties away from zero.

    Works on the exact binary value of the float, so 26.850000000000023
    rounds to 26.9 while 0.125 rounds to 0.13.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def round_to_int(value: float) -> int:
    """Round to the nearest integer, ties towards positive infinity."""
    floor = math.floor(value)
    return floor + 1 if value - floor >= 0.5 else floor


def parse_number(value: Any) -> float:
    """Parse a finite number from a float, int or numeric string.

    Raises:
        ValueError: If the value is not a finite number.
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"not a number: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"not a number: {value!r}") from e
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {value!r}")
    return number


def median(values: Sequence[float]) -> float:
    """Median of a non-empty sequence.

    Even-length sequences average the two middle values.
    """
    if not values:
        raise ValueError("median of an empty sequence")
    nums = sorted(values)
    mid = len(nums) // 2
    if len(nums) % 2:
        return nums[mid]
    return (nums[mid - 1] + nums[mid]) / 2
