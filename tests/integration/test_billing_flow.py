"""Integration tests: renewal flow through metadata and concurrent engine use"""

from concurrent.futures import ThreadPoolExecutor

from fibonacci_billing.config import Settings
from fibonacci_billing.domain.engine import FibonacciBilling
from fibonacci_billing.domain.metadata import (
    amount_in_cents,
    next_billing_from_metadata,
    subscription_metadata,
)
from fibonacci_billing.schemas import build_schedule_response


def test_renewal_flow_matches_schedule():
    """Test renewing through stored metadata walks the generated schedule"""
    engine = FibonacciBilling(Settings(_env_file=None, base_price=19.99, discount_rate=0.08).billing_options())
    expected = engine.generate_billing_schedule(8)

    billed = [engine.calculate_next_billing(0)]
    while len(billed) < 8:
        billed.append(next_billing_from_metadata(engine, subscription_metadata(billed[-1])))

    assert billed == expected
    assert [amount_in_cents(item) for item in billed][:2] == [1999, 3678]


def test_concurrent_term_lookups_share_one_sequence():
    """Test parallel growth of one engine's cache keeps it a valid sequence"""
    engine = FibonacciBilling()
    cycles = list(range(200)) * 4

    with ThreadPoolExecutor(max_workers=8) as pool:
        terms = list(pool.map(engine.get_next_term, reversed(cycles)))

    reference = FibonacciBilling()
    assert terms == [reference.get_next_term(c) for c in reversed(cycles)]
    assert engine.sequence_length == 200


def test_schedule_document_is_json_ready():
    """Test a generated schedule serializes end to end"""
    engine = FibonacciBilling()
    payload = build_schedule_response(engine, 5).model_dump(mode="json", by_alias=True)

    assert len(payload["schedule"]) == 5
    assert payload["schedule"][-1]["cycle"] == 5
    assert payload["summary"]["totalMonths"] == 19
