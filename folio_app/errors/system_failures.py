"""
System failure error classifications for unrecoverable errors.

These exceptions represent failures that a retry with the same input
cannot fix: broken configuration or a defect in a calculation.
"""

from typing import Any, Dict, List, Optional


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class ConfigurationError(SystemFailureError):
    """Configuration could not be loaded or failed validation."""

    def __init__(self, message: str, source: Optional[str] = None,
                 errors: Optional[List[Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.source = source
        self.errors = errors or []


class MetricsCalculationError(SystemFailureError):
    """Unexpected error while computing analytics for an instrument."""

    def __init__(self, message: str, metric_name: Optional[str] = None,
                 calculation_input: Optional[Dict[str, Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.metric_name = metric_name
        self.calculation_input = calculation_input
