"""Numeric helpers for cent-level billing arithmetic"""

import math
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")

# Floats at or above this magnitude are whole numbers
INTEGRAL_FLOAT_LIMIT = 2.0 ** 52


def to_float(value: int | float) -> float:
    """Convert to float, saturating to +-inf for ints beyond the float range"""
    try:
        return float(value)
    except OverflowError:
        return math.copysign(math.inf, value)


def round_money(value: float) -> float:
    """
    Round to 2 decimal places, half away from zero, on the exact binary value.

    Python's round() uses banker's rounding, so round(0.125, 2) == 0.12.
    Billing figures round ties up instead: round_money(0.125) == 0.13.
    Non-finite values and values too large to carry cents pass through unchanged.
    """
    value = to_float(value)
    if not math.isfinite(value) or abs(value) >= INTEGRAL_FLOAT_LIMIT:
        return value
    return float(Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP))


def ieee_divide(numerator: float, denominator: float) -> float:
    """Float division that yields nan/inf on a zero denominator instead of raising"""
    numerator = to_float(numerator)
    denominator = to_float(denominator)
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator
