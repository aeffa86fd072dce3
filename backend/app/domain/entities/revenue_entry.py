"""Domain entity for one month of revenue."""

from dataclasses import dataclass, field
from uuid import uuid4


@dataclass
class RevenueEntry:
    """Revenue for a calendar month alongside the prior-period figure.

    ``month`` is the business key and is unique across all entries.
    """

    month: str
    revenue: float
    prev: float = 0.0
    id: str = field(default_factory=lambda: str(uuid4()))

    def update(self, revenue: float | None = None, prev: float | None = None) -> None:
        """Apply a partial update; omitted fields keep their values."""
        if revenue is not None:
            self.revenue = revenue
        if prev is not None:
            self.prev = prev
