"""Pytest fixtures for testing"""

import pytest
from fibonacci_billing.domain.engine import FibonacciBilling
from fibonacci_billing.domain.models import BillingOptions


@pytest.fixture
def engine() -> FibonacciBilling:
    """Engine with default options ($10/month, 5% per extra month)"""
    return FibonacciBilling()


@pytest.fixture
def premium_engine() -> FibonacciBilling:
    """$20/month plan used for single-cycle pricing checks"""
    return FibonacciBilling(BillingOptions(base_price=20, discount_rate=0.05))


@pytest.fixture
def capped_engine() -> FibonacciBilling:
    """Default plan with terms capped at 6 months"""
    return FibonacciBilling(BillingOptions(cap_term=True, max_term=6))
