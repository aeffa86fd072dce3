from .record_store import InMemoryRecordStore, new_id
from .seed import sample_metrics, sample_products, sample_revenue, sample_transactions

__all__ = [
    "InMemoryRecordStore",
    "new_id",
    "sample_metrics",
    "sample_products",
    "sample_revenue",
    "sample_transactions",
]
