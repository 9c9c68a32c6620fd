"""Domain models - pure Python dataclasses representing billing entities"""

from dataclasses import dataclass


@dataclass(frozen=True)
class BillingOptions:
    """Engine configuration, fixed for the lifetime of an engine"""

    base_price: float = 10.0  # per month, before discount
    discount_rate: float = 0.05  # per extra month of term length
    cap_term: bool = False
    max_term: int = 0  # only applied when cap_term is set


@dataclass(frozen=True)
class BillingCycleInfo:
    """Price and term for a single billing cycle"""

    cycle: int  # 1-indexed
    term_months: int
    base_amount: float
    discount: float  # percentage points, 0-50
    final_amount: float
    savings_amount: float
    effective_monthly_rate: float


@dataclass(frozen=True)
class BillingSummary:
    """Totals over a generated billing schedule"""

    cycles: int
    total_months: int
    total_amount: float
    total_base_amount: float
    total_savings: float
    savings_percentage: float
    effective_monthly_rate: float
