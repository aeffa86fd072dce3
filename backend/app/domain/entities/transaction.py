"""Domain entity for a customer transaction."""

import re
from dataclasses import dataclass
import datetime
from enum import Enum

TRANSACTION_ID_PREFIX = "#TXN-"
_TRANSACTION_ID_RE = re.compile(r"^#TXN-(\d+)$")


class TransactionStatus(str, Enum):
    """Settlement states of a transaction."""

    COMPLETED = "Completed"
    PENDING = "Pending"
    FAILED = "Failed"

    @classmethod
    def coerce(cls, raw: object) -> "TransactionStatus":
        """Map a raw value onto a status, falling back to Pending."""
        if isinstance(raw, cls):
            return raw
        try:
            return cls(raw)
        except ValueError:
            return cls.PENDING


def format_transaction_id(seq: int) -> str:
    return f"{TRANSACTION_ID_PREFIX}{seq}"


def parse_transaction_seq(transaction_id: str) -> int | None:
    """Return the numeric sequence of a ``#TXN-<n>`` id, or None."""
    match = _TRANSACTION_ID_RE.match(transaction_id)
    return int(match.group(1)) if match else None


@dataclass
class Transaction:
    """A sale of one product to one customer.

    Ids are assigned by the record store from a strictly increasing counter.
    """

    id: str
    customer: str
    product: str
    amount: float
    status: TransactionStatus = TransactionStatus.PENDING
    date: datetime.date | None = None

    def update(
        self,
        customer: str | None = None,
        product: str | None = None,
        amount: float | None = None,
        status: TransactionStatus | None = None,
        date: datetime.date | None = None,
    ) -> None:
        """Apply a partial update; omitted fields keep their values."""
        if customer is not None:
            self.customer = customer
        if product is not None:
            self.product = product
        if amount is not None:
            self.amount = amount
        if status is not None:
            self.status = status
        if date is not None:
            self.date = date

    def matches(self, search: str) -> bool:
        """Case-insensitive substring match over customer, product and id."""
        needle = search.lower()
        return (
            needle in self.customer.lower()
            or needle in self.product.lower()
            or needle in self.id.lower()
        )
