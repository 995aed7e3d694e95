"""Time-series analytics over instrument price histories"""

from .history import ChartRange, Interval, aggregate_history, filter_history
from .performance import PerformanceCalculator, calculate_return, compute_metrics, price_on_or_before
from .risk import compute_risk_metrics

__all__ = [
    "PerformanceCalculator",
    "compute_metrics",
    "calculate_return",
    "price_on_or_before",
    "compute_risk_metrics",
    "aggregate_history",
    "filter_history",
    "ChartRange",
    "Interval",
]
