"""Sample data loaded into the record store at startup."""

from collections.abc import Callable
from datetime import date

from app.domain.entities import Metric, Product, RevenueEntry, Transaction, TransactionStatus

# name → (label, unit, suffix)
_METRIC_DEFINITIONS: dict[str, tuple[str, str, str]] = {
    "revenue": ("Total Revenue", "$", "k"),
    "orders": ("Total Orders", "", ""),
    "customers": ("Active Customers", "", ""),
    "conversion": ("Conversion Rate", "", "%"),
}

# name → (value, change)
_SAMPLE_METRIC_VALUES: dict[str, tuple[float, float]] = {
    "revenue": (50.3, 1.5),
    "orders": (1284, 8.2),
    "customers": (3791, -0.4),
    "conversion": (4.6, 0.9),
}

_SAMPLE_REVENUE = [
    ("Jan", 32000, 28000),
    ("Feb", 38000, 31000),
    ("Mar", 35000, 33000),
    ("Apr", 42000, 35000),
    ("May", 46000, 39000),
    ("Jun", 44000, 41000),
    ("Jul", 50300, 43000),
]

_SAMPLE_PRODUCTS = [
    ("Wireless Pro", 4200, "Audio"),
    ("SmartHub X", 3800, "Networking"),
    ("NovaPad", 3100, "Tablets"),
    ("FlexDesk", 2700, "Furniture"),
    ("AirClip", 2100, "Accessories"),
]

_C, _P, _F = TransactionStatus.COMPLETED, TransactionStatus.PENDING, TransactionStatus.FAILED

_SAMPLE_TRANSACTIONS = [
    ("#TXN-8821", "Amara Osei", "Wireless Pro", 249, _C, date(2026, 2, 21)),
    ("#TXN-8820", "Lena Fischer", "SmartHub X", 189, _P, date(2026, 2, 21)),
    ("#TXN-8819", "Carlos Rivera", "NovaPad", 399, _C, date(2026, 2, 20)),
    ("#TXN-8818", "Yuki Tanaka", "FlexDesk", 529, _F, date(2026, 2, 20)),
    ("#TXN-8817", "Priya Nair", "AirClip", 79, _C, date(2026, 2, 19)),
    ("#TXN-8816", "Marcus Webb", "Wireless Pro", 249, _C, date(2026, 2, 19)),
]


def default_metrics() -> list[Metric]:
    """The fixed metric set with zeroed values."""
    return [
        Metric(name=name, label=label, value=0.0, unit=unit, suffix=suffix)
        for name, (label, unit, suffix) in _METRIC_DEFINITIONS.items()
    ]


def sample_metrics() -> list[Metric]:
    metrics = default_metrics()
    for metric in metrics:
        metric.value, metric.change = _SAMPLE_METRIC_VALUES[metric.name]
    return metrics


def sample_revenue(id_factory: Callable[[], str]) -> list[RevenueEntry]:
    return [
        RevenueEntry(id=id_factory(), month=month, revenue=revenue, prev=prev)
        for month, revenue, prev in _SAMPLE_REVENUE
    ]


def sample_products(id_factory: Callable[[], str]) -> list[Product]:
    return [
        Product(id=id_factory(), name=name, sales=sales, category=category)
        for name, sales, category in _SAMPLE_PRODUCTS
    ]


def sample_transactions() -> list[Transaction]:
    """Sample transactions, newest first."""
    return [
        Transaction(id=txn_id, customer=customer, product=product, amount=amount, status=status, date=day)
        for txn_id, customer, product, amount, status, day in _SAMPLE_TRANSACTIONS
    ]
