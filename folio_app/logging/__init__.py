"""
Logging configuration and utilities for the Folio analytics layer.
"""
from .config import RoundFloats, configure_logging, get_analytics_logger, log_classification_decision

__all__ = ["RoundFloats", "configure_logging", "get_analytics_logger", "log_classification_decision"]
