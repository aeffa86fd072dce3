"""Metrics Recalculator — derives headline metrics from the underlying records."""

import logging
from decimal import ROUND_HALF_UP, Decimal

from app.application.interfaces import RecordStore
from app.domain.entities import Metric, Transaction, TransactionStatus

logger = logging.getLogger(__name__)


def round_half_up(value: float, places: int) -> float:
    """Round to `places` decimals with ties going away from zero.

    Works on the shortest decimal form of the float, so 288.25 becomes
    288.3 and 0.125 becomes 0.13.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


class MetricsRecalculator:
    """Keeps the ``revenue`` and ``orders`` metrics in line with the records.

    Two independent paths write these metrics:

    * :meth:`recompute` derives revenue purely from the revenue entries and
      orders from the non-failed transactions. It runs on every metrics read.
    * :meth:`apply_transaction_side_effect` bumps revenue by the amount of a
      newly completed transaction and orders by one.

    The bump is not part of the recompute formula, so a later recompute
    overwrites the revenue bump. Both paths are kept as they are.
    """

    def __init__(self, store: RecordStore):
        self._store = store

    def recompute(self) -> dict[str, Metric]:
        """Recalculate derived metrics and return a snapshot of all metrics."""
        revenue_entries = self._store.list_revenue()
        transactions = self._store.list_transactions()

        total = sum(r.revenue for r in revenue_entries)
        prev = sum(r.prev for r in revenue_entries)
        revenue_value = round_half_up(total / 1000, 1)
        revenue_change = round_half_up((total - prev) / prev * 100, 1) if prev > 0 else 0.0
        orders_value = sum(1 for t in transactions if t.status is not TransactionStatus.FAILED)

        def _apply(metrics: dict[str, Metric]) -> None:
            metrics["revenue"].value = revenue_value
            metrics["revenue"].change = revenue_change
            metrics["orders"].value = orders_value

        self._store.mutate_metrics(_apply)
        logger.debug(
            "Metrics recomputed — revenue=%s (%s%%), orders=%s",
            revenue_value, revenue_change, orders_value,
        )
        return self._store.list_metrics()

    def apply_transaction_side_effect(self, txn: Transaction) -> None:
        """Bump revenue and orders for a newly created completed transaction."""
        if txn.status is not TransactionStatus.COMPLETED:
            return

        def _bump(metrics: dict[str, Metric]) -> None:
            metrics["revenue"].value = round_half_up(
                metrics["revenue"].value + txn.amount / 1000, 2
            )
            metrics["orders"].value += 1

        self._store.mutate_metrics(_bump)
        logger.debug("Applied metric side effect for %s (amount=%s)", txn.id, txn.amount)
