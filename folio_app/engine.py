"""
Per-instrument analytics coordinator.

Applies configuration, trailing returns, risk metrics and fund
classification to one instrument at a time. Holds no per-instrument state,
so callers may analyze instruments concurrently.
"""

from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .classification.classifier import FundClassifier
from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader, build_config
from .config.validation import ConfigValidator
from .data.models import FundComposition
from .data.normalizer import HistoryInput, normalize_history
from .errors import (
    ConfigurationError,
    DataQualityError,
    MetricsCalculationError,
)
from .logging.config import get_analytics_logger
from .metrics.performance import PerformanceCalculator
from .metrics.risk import compute_risk_metrics
from .models.metrics import InstrumentAnalytics

analytics_logger = get_analytics_logger(__name__)

CompositionInput = Union[FundComposition, Mapping[str, Any], None]


class AnalyticsEngine:
    """
    Main coordinator for the dashboard's analytics layer.

    Pipeline per instrument:
    Config → History normalization → Returns / Risk → Classification
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None,
                 overrides: Optional[dict[str, Any]] = None) -> None:
        """
        Initialize the analytics engine.

        Args:
            config_dir: Directory holding instruments.yaml; defaults to the
                repository's config/ directory
            overrides: Settings applied on top of every instrument's config
        """
        self.logger = analytics_logger
        self.config_loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        self.overrides = overrides or {}
        self.logger.info("Analytics engine initialized",
                         config_dir=str(self.config_loader.config_dir))

    def get_config(self, instrument_id: str) -> DefaultConfig:
        """
        Resolve and validate the configuration for an instrument.

        Raises:
            ConfigurationError: If the merged configuration is invalid
        """
        merged = self.config_loader.merge_config(instrument_id, self.overrides)
        errors = ConfigValidator.validate_config(merged)
        if errors:
            self.logger.error(
                "Invalid configuration",
                instrument_id=instrument_id,
                errors=[f"{e.field}: {e.message}" for e in errors],
            )
            raise ConfigurationError(
                f"Invalid configuration for {instrument_id}",
                source=instrument_id,
                errors=errors,
            )
        return build_config(merged)

    def analyze(self, instrument_id: str, history: HistoryInput,
                composition: CompositionInput = None,
                benchmark: HistoryInput = None) -> InstrumentAnalytics:
        """
        Compute every analytic for one instrument.

        Args:
            instrument_id: ISIN or symbol, also the key for config overrides
            history: Price history in any order
            composition: Fund composition, or None for default classification
            benchmark: Optional benchmark history for beta and alpha

        Returns:
            InstrumentAnalytics

        Raises:
            ConfigurationError: If the instrument's configuration is invalid
            DataQualityError: If a history mapping is malformed
            MetricsCalculationError: On any unexpected failure
        """
        config = self.get_config(instrument_id)

        try:
            series = normalize_history(history)
            bench_series = normalize_history(benchmark) if benchmark else None

            performance = PerformanceCalculator(config.lookback).compute(series)
            risk = compute_risk_metrics(series, bench_series, config.risk)
            classification = FundClassifier(config.asset_class, config.region).classify(
                composition, instrument_id=instrument_id
            )

        except DataQualityError:
            raise
        except Exception as e:
            raise MetricsCalculationError(
                f"Unexpected error analyzing {instrument_id}: {str(e)}",
                metric_name="instrument_analytics",
                calculation_input={"instrument_id": instrument_id},
            ) from e

        unavailable = [k for k, v in performance.items() if v is None]
        self.logger.debug(
            "Instrument analyzed",
            instrument_id=instrument_id,
            points=len(series),
            unavailable_windows=unavailable,
            asset_class=classification.asset_class.value,
            region=classification.region.value,
        )

        return InstrumentAnalytics(
            instrument_id=instrument_id,
            performance=performance,
            risk=risk,
            classification=classification,
        )

    def analyze_many(self, instruments: Mapping[str, Mapping[str, Any]]) -> dict[str, InstrumentAnalytics]:
        """
        Analyze several instruments independently.

        Args:
            instruments: instrument_id -> {"history": ..., "composition": ...,
                "benchmark": ...}; only "history" is required

        Returns:
            instrument_id -> InstrumentAnalytics, in input order
        """
        results = {}
        for instrument_id, inputs in instruments.items():
            results[instrument_id] = self.analyze(
                instrument_id,
                inputs.get("history"),
                composition=inputs.get("composition"),
                benchmark=inputs.get("benchmark"),
            )
        return results
