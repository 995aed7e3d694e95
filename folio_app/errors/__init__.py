"""
Error classification system for the analytics layer.

The computation core never raises for data reasons; these exceptions are
raised at the ingestion and configuration boundaries, and by the analytics
coordinator when something unexpected breaks.
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
)
from .system_failures import (
    SystemFailureError,
    ConfigurationError,
    MetricsCalculationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    # System Failures
    "SystemFailureError",
    "ConfigurationError",
    "MetricsCalculationError",
]
