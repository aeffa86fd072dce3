from .metrics_recalculator import MetricsRecalculator
from .dispatcher import Dispatcher, DispatchRequest, DispatchResult, Route

__all__ = [
    "MetricsRecalculator",
    "Dispatcher",
    "DispatchRequest",
    "DispatchResult",
    "Route",
]
