"""Bridge between billing records and payment-provider metadata

Payment integrations keep the billing state on provider objects (subscriptions,
prices) as string-valued metadata, and read the stored cycle back when a
subscription renews. The stored value is the 1-indexed cycle that was just
billed, which is exactly the 0-indexed input for pricing the next one.
"""

import math
import re
from typing import Dict, Mapping

from fibonacci_billing.domain.engine import FibonacciBilling
from fibonacci_billing.domain.exceptions import InvalidMetadataError, NotFibonacciSubscriptionError
from fibonacci_billing.domain.models import BillingCycleInfo
from fibonacci_billing.utils.rounding import to_float

CYCLE_METADATA_KEY = "fibonacciBillingCycle"

# ASCII digits only; other Unicode digits are not a number to provider SDKs
_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")

# Integral numbers at or above this switch to exponent notation
EXPONENT_THRESHOLD = 1e21


def _format_number(value: int | float) -> str:
    """
    Render a number the way provider SDKs stringify it.

    20.0 -> "20", 27.5 -> "27.5", 1e21 -> "1e+21", overflowing ints -> "Infinity".
    Magnitudes below 1e-4 are outside cent precision and use Python's repr.
    """
    value = to_float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < EXPONENT_THRESHOLD:
        return str(int(value))
    return repr(value)


def subscription_metadata(info: BillingCycleInfo) -> Dict[str, str]:
    """Full billing record, as stored on a subscription"""
    return {
        CYCLE_METADATA_KEY: _format_number(info.cycle),
        "termMonths": _format_number(info.term_months),
        "baseAmount": _format_number(info.base_amount),
        "discount": _format_number(info.discount),
        "finalAmount": _format_number(info.final_amount),
        "savingsAmount": _format_number(info.savings_amount),
        "effectiveMonthlyRate": _format_number(info.effective_monthly_rate),
    }


def price_metadata(info: BillingCycleInfo) -> Dict[str, str]:
    """Subset of the billing record stored on a per-term price"""
    return {
        CYCLE_METADATA_KEY: _format_number(info.cycle),
        "termMonths": _format_number(info.term_months),
        "discount": _format_number(info.discount),
        "effectiveMonthlyRate": _format_number(info.effective_monthly_rate),
    }


def amount_in_cents(info: BillingCycleInfo) -> int:
    """Final amount in minor units, halves rounded up"""
    return math.floor(info.final_amount * 100 + 0.5)


def read_billing_cycle(metadata: Mapping[str, str] | None) -> int:
    """
    Extract the stored billing cycle from provider metadata.

    Accepts a leading integer followed by anything ("3", " 3", "3abc").

    Raises:
        NotFibonacciSubscriptionError: metadata has no cycle key
        InvalidMetadataError: the cycle value does not start with an integer
    """
    if not metadata or not metadata.get(CYCLE_METADATA_KEY):
        raise NotFibonacciSubscriptionError("Not a Fibonacci billing subscription")

    raw = str(metadata[CYCLE_METADATA_KEY])
    match = _LEADING_INT.match(raw)
    if match is None:
        raise InvalidMetadataError(f"Invalid billing cycle in metadata: {raw!r}")

    return int(match.group(1))


def next_billing_from_metadata(engine: FibonacciBilling, metadata: Mapping[str, str] | None) -> BillingCycleInfo:
    """Price the cycle that follows the one recorded in `metadata`"""
    return engine.calculate_next_billing(read_billing_cycle(metadata))


def cycles_until_discount(engine: FibonacciBilling, percent: float, max_cycles: int = 100) -> int | None:
    """
    First 0-indexed cycle whose discount reaches `percent` points.

    Returns None when the threshold is not reached within `max_cycles`,
    e.g. when it is above the 50% ceiling or the term is capped too low.
    """
    for cycle in range(max_cycles):
        if engine.calculate_next_billing(cycle).discount >= percent:
            return cycle
    return None
