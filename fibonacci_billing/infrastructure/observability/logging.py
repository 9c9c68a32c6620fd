"""Structured JSON logging for billing calculations"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from fibonacci_billing.config import settings
from fibonacci_billing.domain.models import BillingSummary


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str | None = None) -> None:
    """
    Configure structured JSON logging.

    Entry point for processes embedding the engine; the engine itself only
    emits records. Level defaults to the FIBONACCI_BILLING_LOG_LEVEL setting.
    """
    logger = logging.getLogger()
    logger.setLevel(level or settings.log_level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_summary(summary: BillingSummary) -> None:
    """Log structured billing summary for analysis"""
    logging.info(
        "Billing summary computed",
        extra={
            "step": "billing_summary",
            "cycles": summary.cycles,
            "total_months": summary.total_months,
            "total_amount": summary.total_amount,
            "total_savings": summary.total_savings,
            "savings_percentage": summary.savings_percentage,
            "effective_monthly_rate": summary.effective_monthly_rate,
        },
    )
