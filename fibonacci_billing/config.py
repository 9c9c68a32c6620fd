"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from fibonacci_billing.domain.models import BillingOptions


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="FIBONACCI_BILLING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Service
    service_name: str = "fibonacci-billing"
    log_level: str = "INFO"

    # Default plan
    base_price: float = 10.0
    discount_rate: float = 0.05
    cap_term: bool = False
    max_term: int = 0

    # Schedules
    default_cycles: int = 10

    def billing_options(self) -> BillingOptions:
        """Engine options for the configured default plan"""
        return BillingOptions(
            base_price=self.base_price,
            discount_rate=self.discount_rate,
            cap_term=self.cap_term,
            max_term=self.max_term,
        )


settings = Settings()
