"""Domain entity for dashboard summary metrics."""

from dataclasses import dataclass

METRIC_NAMES = ("revenue", "orders", "customers", "conversion")


@dataclass
class Metric:
    """A named headline figure shown on the dashboard.

    The set of names is fixed at startup; metrics are only ever updated.
    """

    name: str
    label: str
    value: float
    change: float = 0.0
    unit: str = ""
    suffix: str = ""

    def update(self, value: float | None = None, change: float | None = None) -> None:
        if value is not None:
            self.value = value
        if change is not None:
            self.change = change
