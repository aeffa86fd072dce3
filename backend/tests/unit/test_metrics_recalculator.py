"""Unit tests for the MetricsRecalculator."""

import pytest

from app.application.schemas import RevenueCreate, TransactionCreate
from app.application.services import MetricsRecalculator
from app.application.services.metrics_recalculator import round_half_up
from app.domain.entities import TransactionStatus
from app.infrastructure.memory import (
    InMemoryRecordStore,
    sample_metrics,
    sample_revenue,
    sample_transactions,
)


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore(
        metrics=sample_metrics(),
        revenue=sample_revenue(lambda: "fixed"),
        transactions=sample_transactions(),
    )


@pytest.fixture
def recalculator(store: InMemoryRecordStore) -> MetricsRecalculator:
    return MetricsRecalculator(store)


def test_recompute_derives_revenue_and_orders(recalculator: MetricsRecalculator):
    metrics = recalculator.recompute()

    # 287300 total against 250000 prior
    assert metrics["revenue"].value == 287.3
    assert metrics["revenue"].change == 14.9
    # six seeded transactions, one failed
    assert metrics["orders"].value == 5


def test_recompute_leaves_other_metrics_alone(recalculator: MetricsRecalculator):
    metrics = recalculator.recompute()
    assert metrics["customers"].value == 3791
    assert metrics["conversion"].value == 4.6


def test_recompute_is_idempotent(recalculator: MetricsRecalculator):
    first = recalculator.recompute()
    second = recalculator.recompute()
    assert first == second


def test_recompute_with_zero_prev_has_zero_change():
    store = InMemoryRecordStore()
    store.create_revenue(RevenueCreate(month="Jan", revenue=1200, prev=0))

    metrics = MetricsRecalculator(store).recompute()

    assert metrics["revenue"].value == 1.2
    assert metrics["revenue"].change == 0


def test_side_effect_bumps_revenue_and_orders_for_completed(
    store: InMemoryRecordStore, recalculator: MetricsRecalculator
):
    recalculator.recompute()
    txn = store.create_transaction(
        TransactionCreate(customer="X", product="Y", amount=1234, status="Completed")
    )

    recalculator.apply_transaction_side_effect(txn)

    assert store.get_metric("revenue").value == pytest.approx(288.53)
    assert store.get_metric("orders").value == 6


@pytest.mark.parametrize("status", [TransactionStatus.PENDING, TransactionStatus.FAILED])
def test_side_effect_ignores_non_completed(
    store: InMemoryRecordStore, recalculator: MetricsRecalculator, status: TransactionStatus
):
    before = store.list_metrics()
    txn = store.create_transaction(
        TransactionCreate(customer="X", product="Y", amount=500, status=status)
    )

    recalculator.apply_transaction_side_effect(txn)

    assert store.list_metrics() == before


def test_recompute_discards_revenue_bump_from_transactions(
    store: InMemoryRecordStore, recalculator: MetricsRecalculator
):
    """The incremental bump and the derivation formula are not reconciled.

    Revenue is derived from revenue entries only, so the bump applied for a
    completed transaction disappears on the next recompute, while orders
    agree because the new transaction is counted by both paths.
    """
    recalculator.recompute()
    txn = store.create_transaction(
        TransactionCreate(customer="X", product="Y", amount=1000, status="Completed")
    )
    recalculator.apply_transaction_side_effect(txn)
    bumped = store.get_metric("revenue").value

    metrics = recalculator.recompute()

    assert bumped == pytest.approx(288.3)
    assert metrics["revenue"].value == 287.3
    assert metrics["orders"].value == 6


@pytest.mark.parametrize(
    ("value", "places", "expected"),
    [
        (288.25, 1, 288.3),
        (0.125, 2, 0.13),
        (14.95, 1, 15.0),
        (287.3, 1, 287.3),
        (-0.25, 1, -0.3),
    ],
)
def test_round_half_up_sends_ties_away_from_zero(value, places, expected):
    assert round_half_up(value, places) == expected


def test_recompute_rounds_revenue_tie_upwards(
    store: InMemoryRecordStore, recalculator: MetricsRecalculator
):
    # 287300 seeded + 950 = 288250, which sits exactly between 288.2 and 288.3
    store.create_revenue(RevenueCreate(month="Aug", revenue=950, prev=0))

    metrics = recalculator.recompute()

    assert metrics["revenue"].value == 288.3
    assert metrics["revenue"].change == 15.3


def test_side_effect_rounds_bump_tie_upwards():
    store = InMemoryRecordStore()
    txn = store.create_transaction(
        TransactionCreate(customer="X", product="Y", amount=125, status="Completed")
    )

    MetricsRecalculator(store).apply_transaction_side_effect(txn)

    assert store.get_metric("revenue").value == 0.13
    assert store.get_metric("orders").value == 1
