from .metric import Metric, METRIC_NAMES
from .revenue_entry import RevenueEntry
from .product import Product, DEFAULT_CATEGORY
from .transaction import (
    Transaction,
    TransactionStatus,
    format_transaction_id,
    parse_transaction_seq,
)

__all__ = [
    "Metric",
    "METRIC_NAMES",
    "RevenueEntry",
    "Product",
    "DEFAULT_CATEGORY",
    "Transaction",
    "TransactionStatus",
    "format_transaction_id",
    "parse_transaction_seq",
]
