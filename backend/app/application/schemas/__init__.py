from .metric import MetricUpdate, MetricResponse
from .revenue import RevenueCreate, RevenueUpdate, RevenueResponse
from .product import ProductCreate, ProductUpdate, ProductResponse
from .transaction import (
    TransactionCreate,
    TransactionUpdate,
    TransactionQuery,
    TransactionResponse,
)

__all__ = [
    "MetricUpdate",
    "MetricResponse",
    "RevenueCreate",
    "RevenueUpdate",
    "RevenueResponse",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "TransactionCreate",
    "TransactionUpdate",
    "TransactionQuery",
    "TransactionResponse",
]
