"""Pydantic schemas for option validation and billing record serialization"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fibonacci_billing.domain.engine import FibonacciBilling
from fibonacci_billing.domain.models import BillingOptions


class BillingOptionsSchema(BaseModel):
    """Validated engine options; the engine itself accepts anything"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    base_price: float = Field(10.0, gt=0, description="Price per month before discount")
    discount_rate: float = Field(0.05, ge=0, le=1, description="Discount per extra month of term")
    cap_term: bool = False
    max_term: int = Field(0, ge=0, description="Term ceiling in months when cap_term is set")

    def to_options(self) -> BillingOptions:
        return BillingOptions(
            base_price=self.base_price,
            discount_rate=self.discount_rate,
            cap_term=self.cap_term,
            max_term=self.max_term,
        )


class BillingCycleSchema(BaseModel):
    """Single cycle in a billing schedule"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    cycle: int
    term_months: int
    base_amount: float
    discount: float
    final_amount: float
    savings_amount: float
    effective_monthly_rate: float


class BillingSummarySchema(BaseModel):
    """Totals over a billing schedule"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    cycles: int
    total_months: int
    total_amount: float
    total_base_amount: float
    total_savings: float
    savings_percentage: float
    effective_monthly_rate: float


class BillingScheduleResponse(BaseModel):
    """Options, schedule and summary in one document"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    options: BillingOptionsSchema
    schedule: List[BillingCycleSchema]
    summary: BillingSummarySchema


def build_schedule_response(engine: FibonacciBilling, cycles: int = 10) -> BillingScheduleResponse:
    """Generate a schedule and its summary as a serializable document"""
    schedule = engine.generate_billing_schedule(cycles)
    summary = engine.get_billing_summary(cycles)

    return BillingScheduleResponse(
        # Engine options are not re-validated: degenerate plans still serialize
        options=BillingOptionsSchema.model_construct(
            basePrice=engine.base_price,
            discountRate=engine.discount_rate,
            capTerm=engine.cap_term,
            maxTerm=engine.max_term,
        ),
        schedule=[BillingCycleSchema.model_validate(item) for item in schedule],
        summary=BillingSummarySchema.model_validate(summary),
    )
