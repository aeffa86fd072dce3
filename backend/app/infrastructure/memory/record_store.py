"""In-memory implementation of the RecordStore port.

All four collections live in plain Python containers guarded by one
re-entrant lock. Nothing survives a restart.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import replace
from typing import TypeVar
from uuid import uuid4

from app.application.interfaces import RecordStore
from app.application.schemas import (
    MetricUpdate,
    ProductCreate,
    ProductUpdate,
    RevenueCreate,
    RevenueUpdate,
    TransactionCreate,
    TransactionQuery,
    TransactionUpdate,
)
from app.domain.entities import (
    Metric,
    Product,
    RevenueEntry,
    Transaction,
    format_transaction_id,
    parse_transaction_seq,
)
from app.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from app.infrastructure.memory.seed import default_metrics

logger = logging.getLogger(__name__)

T = TypeVar("T")


def new_id() -> str:
    """Opaque unique id for revenue entries and products."""
    return str(uuid4())


class InMemoryRecordStore(RecordStore):
    """Implements the RecordStore port with lists and a dict behind an RLock.

    Args:
        metrics: Initial metrics. Defaults to the fixed set with zero values.
        revenue: Initial revenue entries, kept in insertion order.
        products: Initial products, kept in insertion order.
        transactions: Initial transactions, newest first.
        id_factory: Source of opaque unique ids for revenue entries and products.
        transaction_seq_start: Lowest sequence number handed out for new
            transactions. The counter always starts above any seeded id.
    """

    def __init__(
        self,
        *,
        metrics: Iterable[Metric] | None = None,
        revenue: Iterable[RevenueEntry] = (),
        products: Iterable[Product] = (),
        transactions: Iterable[Transaction] = (),
        id_factory: Callable[[], str] = new_id,
        transaction_seq_start: int = 1,
    ) -> None:
        self._lock = threading.RLock()
        self._id_factory = id_factory
        self._metrics: dict[str, Metric] = {
            m.name: replace(m) for m in (metrics if metrics is not None else default_metrics())
        }
        self._revenue: list[RevenueEntry] = [replace(r) for r in revenue]
        self._products: list[Product] = [replace(p) for p in products]
        self._transactions: list[Transaction] = [replace(t) for t in transactions]

        seeded = [parse_transaction_seq(t.id) for t in self._transactions]
        highest = max((seq for seq in seeded if seq is not None), default=0)
        self._next_txn_seq = max(transaction_seq_start, highest + 1)

    # ── Metrics ──────────────────────────────────────────────────────

    def list_metrics(self) -> dict[str, Metric]:
        with self._lock:
            return {name: replace(m) for name, m in self._metrics.items()}

    def get_metric(self, name: str) -> Metric:
        with self._lock:
            return replace(self._require_metric(name))

    def update_metric(self, name: str, patch: MetricUpdate) -> Metric:
        with self._lock:
            metric = self._require_metric(name)
            metric.update(**patch.model_dump(exclude_unset=True))
            return replace(metric)

    def mutate_metrics(self, fn: Callable[[dict[str, Metric]], T]) -> T:
        with self._lock:
            return fn(self._metrics)

    def _require_metric(self, name: str) -> Metric:
        metric = self._metrics.get(name)
        if metric is None:
            raise EntityNotFoundError("Metric", name, f'Unknown metric "{name}"')
        return metric

    # ── Revenue ──────────────────────────────────────────────────────

    def list_revenue(self) -> list[RevenueEntry]:
        with self._lock:
            return [replace(r) for r in self._revenue]

    def create_revenue(self, data: RevenueCreate) -> RevenueEntry:
        with self._lock:
            if self._find_revenue(data.month) is not None:
                raise DuplicateEntityError(
                    "RevenueEntry", "month", data.month,
                    f'Month "{data.month}" already exists',
                )
            entry = RevenueEntry(
                id=self._id_factory(),
                month=data.month,
                revenue=data.revenue,
                prev=data.prev,
            )
            self._revenue.append(entry)
            logger.info("Created revenue entry for %s", entry.month)
            return replace(entry)

    def find_revenue(self, month: str) -> RevenueEntry | None:
        with self._lock:
            entry = self._find_revenue(month)
            return replace(entry) if entry else None

    def update_revenue(self, month: str, patch: RevenueUpdate) -> RevenueEntry:
        with self._lock:
            entry = self._require_revenue(month)
            entry.update(**patch.model_dump(exclude_unset=True))
            return replace(entry)

    def delete_revenue(self, month: str) -> RevenueEntry:
        with self._lock:
            entry = self._require_revenue(month)
            self._revenue.remove(entry)
            logger.info("Deleted revenue entry for %s", month)
            return entry

    def _find_revenue(self, month: str) -> RevenueEntry | None:
        return next((r for r in self._revenue if r.month == month), None)

    def _require_revenue(self, month: str) -> RevenueEntry:
        entry = self._find_revenue(month)
        if entry is None:
            raise EntityNotFoundError("RevenueEntry", month, "Month not found")
        return entry

    # ── Products ─────────────────────────────────────────────────────

    def list_products(self) -> list[Product]:
        with self._lock:
            snapshot = [replace(p) for p in self._products]
        return sorted(snapshot, key=lambda p: p.sales, reverse=True)

    def create_product(self, data: ProductCreate) -> Product:
        with self._lock:
            product = Product(
                id=self._id_factory(),
                name=data.name,
                sales=data.sales,
                category=data.category,
            )
            self._products.append(product)
            logger.info("Created product %s (%s)", product.name, product.id)
            return replace(product)

    def find_product(self, product_id: str) -> Product | None:
        with self._lock:
            product = self._find_product(product_id)
            return replace(product) if product else None

    def update_product(self, product_id: str, patch: ProductUpdate) -> Product:
        with self._lock:
            product = self._require_product(product_id)
            product.update(**patch.model_dump(exclude_unset=True))
            return replace(product)

    def delete_product(self, product_id: str) -> Product:
        with self._lock:
            product = self._require_product(product_id)
            self._products.remove(product)
            logger.info("Deleted product %s", product_id)
            return product

    def _find_product(self, product_id: str) -> Product | None:
        return next((p for p in self._products if p.id == product_id), None)

    def _require_product(self, product_id: str) -> Product:
        product = self._find_product(product_id)
        if product is None:
            raise EntityNotFoundError("Product", product_id, "Product not found")
        return product

    # ── Transactions ─────────────────────────────────────────────────

    def list_transactions(self, query: TransactionQuery | None = None) -> list[Transaction]:
        with self._lock:
            snapshot = [replace(t) for t in self._transactions]

        # sorted() is stable with reverse=True, so same-day rows keep stored order
        result = sorted(snapshot, key=lambda t: t.date, reverse=True)
        if query is None:
            return result
        if query.status:
            result = [t for t in result if t.status.value == query.status]
        if query.search:
            result = [t for t in result if t.matches(query.search)]
        if query.limit is not None:
            result = result[: query.limit]
        return result

    def create_transaction(self, data: TransactionCreate) -> Transaction:
        with self._lock:
            txn = Transaction(
                id=format_transaction_id(self._next_txn_seq),
                customer=data.customer,
                product=data.product,
                amount=data.amount,
                status=data.status,
                date=data.date,
            )
            self._next_txn_seq += 1
            self._transactions.insert(0, txn)
            logger.info("Created transaction %s (%s)", txn.id, txn.status.value)
            return replace(txn)

    def find_transaction(self, transaction_id: str) -> Transaction | None:
        with self._lock:
            txn = self._find_transaction(transaction_id)
            return replace(txn) if txn else None

    def update_transaction(self, transaction_id: str, patch: TransactionUpdate) -> Transaction:
        with self._lock:
            txn = self._require_transaction(transaction_id)
            txn.update(**patch.model_dump(exclude_unset=True))
            return replace(txn)

    def delete_transaction(self, transaction_id: str) -> Transaction:
        with self._lock:
            txn = self._require_transaction(transaction_id)
            self._transactions.remove(txn)
            logger.info("Deleted transaction %s", transaction_id)
            return txn

    def _find_transaction(self, transaction_id: str) -> Transaction | None:
        return next((t for t in self._transactions if t.id == transaction_id), None)

    def _require_transaction(self, transaction_id: str) -> Transaction:
        txn = self._find_transaction(transaction_id)
        if txn is None:
            raise EntityNotFoundError("Transaction", transaction_id, "Transaction not found")
        return txn

    # ── Introspection ────────────────────────────────────────────────

    def counts(self) -> dict[str, int]:
        with self._lock:
            return {
                "revenueMonths": len(self._revenue),
                "products": len(self._products),
                "transactions": len(self._transactions),
            }
