"""Unit tests for environment-driven settings"""

from fibonacci_billing.config import Settings
from fibonacci_billing.domain.models import BillingOptions


def test_settings_defaults(monkeypatch):
    """Test default plan matches engine defaults"""
    for name in ("BASE_PRICE", "DISCOUNT_RATE", "CAP_TERM", "MAX_TERM"):
        monkeypatch.delenv(f"FIBONACCI_BILLING_{name}", raising=False)

    settings = Settings(_env_file=None)

    assert settings.service_name == "fibonacci-billing"
    assert settings.default_cycles == 10
    assert settings.billing_options() == BillingOptions()


def test_settings_from_environment(monkeypatch):
    """Test plan options are read from prefixed environment variables"""
    monkeypatch.setenv("FIBONACCI_BILLING_BASE_PRICE", "19.99")
    monkeypatch.setenv("FIBONACCI_BILLING_DISCOUNT_RATE", "0.08")
    monkeypatch.setenv("FIBONACCI_BILLING_CAP_TERM", "true")
    monkeypatch.setenv("FIBONACCI_BILLING_MAX_TERM", "24")

    options = Settings(_env_file=None).billing_options()

    assert options == BillingOptions(base_price=19.99, discount_rate=0.08, cap_term=True, max_term=24)
