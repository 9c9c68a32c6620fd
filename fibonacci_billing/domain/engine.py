"""Fibonacci billing engine - term selection, pricing and schedule aggregation"""

import logging
import threading
from typing import List

from fibonacci_billing.domain.models import BillingOptions, BillingCycleInfo, BillingSummary
from fibonacci_billing.infrastructure.observability.metrics import (
    calculation_counter,
    sequence_extension_counter,
    schedule_cycles_histogram,
    record_term,
)
from fibonacci_billing.utils.rounding import round_money, ieee_divide, to_float

logger = logging.getLogger(__name__)

# Classical Fibonacci with a single leading 1
SEED_SEQUENCE = (1, 2, 3, 5, 8, 13, 21, 34, 55, 89, 144)

MAX_DISCOUNT = 0.5


class FibonacciBilling:
    """
    Subscription billing where renewal terms grow along the Fibonacci sequence.

    Cycle arguments are zero-indexed counts of completed cycles; the returned
    BillingCycleInfo.cycle is one-indexed ("cycle 1" is the first bill).

    The engine never validates its options. Degenerate options produce
    degenerate numbers rather than errors; see fibonacci_billing.schemas for
    an opt-in validation layer.
    """

    def __init__(self, options: BillingOptions | None = None) -> None:
        self.options = options if options is not None else BillingOptions()
        self._sequence: List[int] = list(SEED_SEQUENCE)
        self._grow_lock = threading.Lock()

    @property
    def base_price(self) -> float:
        return self.options.base_price

    @property
    def discount_rate(self) -> float:
        return self.options.discount_rate

    @property
    def cap_term(self) -> bool:
        return self.options.cap_term

    @property
    def max_term(self) -> int:
        return self.options.max_term

    @property
    def sequence_length(self) -> int:
        """Number of terms currently cached"""
        return len(self._sequence)

    def _ensure_sequence(self, length: int) -> None:
        """Grow the cached sequence until it holds at least `length` terms"""
        if len(self._sequence) >= length:
            return

        with self._grow_lock:
            start = len(self._sequence)
            while len(self._sequence) < length:
                self._sequence.append(self._sequence[-1] + self._sequence[-2])
            added = len(self._sequence) - start

        if added:
            sequence_extension_counter.inc(added)
            logger.debug(
                "Extended billing term sequence",
                extra={"from_length": start, "to_length": start + added},
            )

    def get_next_term(self, current_cycle: int) -> int:
        """
        Term length in months for the cycle after `current_cycle` completed ones.

        Negative cycles are treated as "before the first cycle" and get the
        first term. The cap only applies when cap_term is set and max_term > 0.
        """
        if current_cycle < 0:
            return self._sequence[0]

        self._ensure_sequence(current_cycle + 1)

        term = self._sequence[min(current_cycle, len(self._sequence) - 1)]

        if self.cap_term and self.max_term > 0:
            term = min(term, self.max_term)

        return term

    def calculate_next_billing(self, current_cycle: int) -> BillingCycleInfo:
        """
        Price the next billing cycle.

        Discount grows by discount_rate for every month beyond the first and
        is capped at 50%. Every output field is rounded once, from unrounded
        intermediates, so base_amount - final_amount can differ from
        savings_amount by a cent.

        Terms past the float range price as inf (amounts) and nan (savings,
        monthly rate); term_months itself stays exact.
        """
        term_months = self.get_next_term(current_cycle)
        months = to_float(term_months)
        base_amount = self.base_price * months

        discount = min(self.discount_rate * (months - 1), MAX_DISCOUNT)
        final_amount = base_amount * (1 - discount)

        calculation_counter.inc()
        record_term(term_months)

        return BillingCycleInfo(
            cycle=current_cycle + 1,
            term_months=term_months,
            base_amount=round_money(base_amount),
            discount=round_money(discount * 100),
            final_amount=round_money(final_amount),
            savings_amount=round_money(base_amount - final_amount),
            effective_monthly_rate=round_money(final_amount / months),
        )

    def generate_billing_schedule(self, cycles: int = 10) -> List[BillingCycleInfo]:
        """Billing info for cycles 1..`cycles`, computed in order"""
        schedule = [self.calculate_next_billing(i) for i in range(cycles)]
        schedule_cycles_histogram.observe(len(schedule))
        return schedule

    def get_billing_summary(self, cycles: int = 10) -> BillingSummary:
        """
        Aggregate a freshly generated schedule.

        Totals are sums of the per-cycle rounded fields. Ratios use the
        unrounded totals and follow IEEE float division, so an empty schedule
        or a zero base price yields nan/inf rather than raising.
        """
        schedule = self.generate_billing_schedule(cycles)

        total_months = sum(item.term_months for item in schedule)
        total_amount = sum(item.final_amount for item in schedule)
        total_base_amount = sum(item.base_amount for item in schedule)
        total_savings = sum(item.savings_amount for item in schedule)

        return BillingSummary(
            cycles=cycles,
            total_months=total_months,
            total_amount=round_money(total_amount),
            total_base_amount=round_money(total_base_amount),
            total_savings=round_money(total_savings),
            savings_percentage=round_money(ieee_divide(total_savings, total_base_amount) * 100),
            effective_monthly_rate=round_money(ieee_divide(total_amount, total_months)),
        )
