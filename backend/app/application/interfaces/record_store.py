"""Abstract store interface (port) for the analytics collections."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TypeVar

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
from app.domain.entities import Metric, Product, RevenueEntry, Transaction

T = TypeVar("T")


class RecordStore(ABC):
    """Port for the four analytics collections — implemented in the infrastructure layer.

    Every list/find method returns copies; callers never hold a reference
    into the live collections.
    """

    # ── Metrics ──────────────────────────────────────────────────────

    @abstractmethod
    def list_metrics(self) -> dict[str, Metric]:
        """Snapshot of all metrics keyed by name, in seed order."""
        ...

    @abstractmethod
    def get_metric(self, name: str) -> Metric:
        """Raises EntityNotFoundError for names outside the fixed set."""
        ...

    @abstractmethod
    def update_metric(self, name: str, patch: MetricUpdate) -> Metric:
        ...

    @abstractmethod
    def mutate_metrics(self, fn: Callable[[dict[str, Metric]], T]) -> T:
        """Run ``fn`` against the live metrics while holding the store lock."""
        ...

    # ── Revenue ──────────────────────────────────────────────────────

    @abstractmethod
    def list_revenue(self) -> list[RevenueEntry]:
        ...

    @abstractmethod
    def create_revenue(self, data: RevenueCreate) -> RevenueEntry:
        """Append a new month. Raises DuplicateEntityError if the month exists."""
        ...

    @abstractmethod
    def find_revenue(self, month: str) -> RevenueEntry | None:
        ...

    @abstractmethod
    def update_revenue(self, month: str, patch: RevenueUpdate) -> RevenueEntry:
        ...

    @abstractmethod
    def delete_revenue(self, month: str) -> RevenueEntry:
        ...

    # ── Products ─────────────────────────────────────────────────────

    @abstractmethod
    def list_products(self) -> list[Product]:
        """Products ordered by sales, highest first."""
        ...

    @abstractmethod
    def create_product(self, data: ProductCreate) -> Product:
        ...

    @abstractmethod
    def find_product(self, product_id: str) -> Product | None:
        ...

    @abstractmethod
    def update_product(self, product_id: str, patch: ProductUpdate) -> Product:
        ...

    @abstractmethod
    def delete_product(self, product_id: str) -> Product:
        ...

    # ── Transactions ─────────────────────────────────────────────────

    @abstractmethod
    def list_transactions(self, query: TransactionQuery | None = None) -> list[Transaction]:
        """Newest first, then filtered by status and search, then truncated."""
        ...

    @abstractmethod
    def create_transaction(self, data: TransactionCreate) -> Transaction:
        """Insert a transaction with the next ``#TXN-<n>`` id."""
        ...

    @abstractmethod
    def find_transaction(self, transaction_id: str) -> Transaction | None:
        ...

    @abstractmethod
    def update_transaction(self, transaction_id: str, patch: TransactionUpdate) -> Transaction:
        ...

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> Transaction:
        ...

    # ── Introspection ────────────────────────────────────────────────

    @abstractmethod
    def counts(self) -> dict[str, int]:
        """Item counts per collection, used by the health check."""
        ...
