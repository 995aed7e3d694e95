"""Integration tests for the analytics pipeline over provider-shaped data."""

import io
import random
from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta
from unittest.mock import Mock

import orjson
import pytest
import structlog

from folio_app.classification.classifier import classify
from folio_app.engine import AnalyticsEngine
from folio_app.logging.config import configure_logging, get_analytics_logger, log_classification_decision
from folio_app.metrics.performance import compute_metrics


def _provider_history(days: int, end: date = date(2024, 6, 28)):
    """Weekday closes as a provider adapter would deliver them."""
    rows = []
    day = end - timedelta(days=days)
    price = 50.0
    rng = random.Random(7)
    while day <= end:
        if day.weekday() < 5:
            price *= 1 + rng.uniform(-0.01, 0.012)
            rows.append({"date": day.isoformat(), "value": round(price, 4)})
        day += timedelta(days=1)
    return rows


class TestPipeline:
    """End-to-end analytics over provider-shaped input."""

    def setup_method(self):
        configure_logging(level="DEBUG", format_json=True, stream=io.StringIO())

    def teardown_method(self):
        structlog.reset_defaults()

    def test_weekend_gaps_resolve_to_previous_close(self, tmp_path):
        rows = _provider_history(400)
        engine = AnalyticsEngine(config_dir=tmp_path)

        result = engine.analyze("IE00B4L5Y983", rows, composition={
            "allocation": [{"name": "stockPosition", "weight": 99.0}],
            "regions": [{"name": "Japón", "weight": "45"},
                        {"name": "United States", "weight": "30"},
                        {"name": "Europe", "weight": "25"}],
        })

        assert all(value is not None for value in result.performance.to_dict().values())
        assert result.classification.to_dict() == {"assetClass": "Equity", "region": "Japan"}
        payload = orjson.loads(result.to_json())
        assert payload["performance"]["Total"] == pytest.approx(result.performance.total)

    def test_shuffled_provider_rows(self):
        rows = _provider_history(200)
        shuffled = list(rows)
        random.Random(1).shuffle(shuffled)

        assert compute_metrics(shuffled) == compute_metrics(rows)

    def test_concurrent_calls_are_independent(self, tmp_path):
        engine = AnalyticsEngine(config_dir=tmp_path)
        histories = {f"FUND-{n}": _provider_history(30 * n) for n in range(1, 9)}

        sequential = {key: engine.analyze(key, rows) for key, rows in histories.items()}
        with ThreadPoolExecutor(max_workers=4) as pool:
            futures = {key: pool.submit(engine.analyze, key, rows) for key, rows in histories.items()}
            concurrent = {key: future.result() for key, future in futures.items()}

        assert concurrent == sequential


class TestLogging:
    """Test structured logging helpers."""

    def teardown_method(self):
        structlog.reset_defaults()

    @staticmethod
    def _records(stream):
        return [orjson.loads(line) for line in stream.getvalue().splitlines()]

    def test_classification_decision_fields(self):
        logger = Mock()
        logger.bind.return_value = logger

        log_classification_decision(logger, "region", "Japan", "japan_dominant",
                                    {"japan": 45.0}, instrument_id="X", context={"source": "test"})

        first_bind = logger.bind.call_args_list[0].kwargs
        assert first_bind["dimension"] == "region"
        assert first_bind["category"] == "Japan"
        assert first_bind["rule"] == "japan_dominant"
        assert logger.bind.call_args_list[1].kwargs == {"context": {"source": "test"}}
        logger.debug.assert_called_once_with("Classification decision")

    def test_analytics_logger_fields(self):
        stream = io.StringIO()
        configure_logging(format_json=True, include_timestamp=False, stream=stream)

        get_analytics_logger("folio_app.tests").info("Instrument analyzed", sharpe=1.23456789)

        (record,) = self._records(stream)
        assert record["event"] == "Instrument analyzed"
        assert record["level"] == "info"
        assert record["subsystem"] == "analytics"
        assert record["logger_name"] == "folio_app.tests"
        assert record["sharpe"] == 1.2346

    def test_logger_created_before_configuration(self):
        logger = get_analytics_logger("folio_app.tests")
        stream = io.StringIO()
        configure_logging(format_json=True, stream=stream)

        logger.warning("late")

        assert self._records(stream)[0]["event"] == "late"

    def test_level_filtering(self):
        stream = io.StringIO()
        configure_logging(level="INFO", format_json=True, stream=stream)

        classify({"allocation": [{"name": "stockPosition", "weight": 90}]})

        assert stream.getvalue() == ""

    def test_classification_buckets_are_rounded(self):
        stream = io.StringIO()
        configure_logging(level="DEBUG", format_json=True, include_timestamp=False,
                          float_digits=2, stream=stream)

        classify({"regions": [{"name": "Japón", "weight": "45,678"},
                              {"name": "United States", "weight": "30.1234"}]})

        decisions = [r for r in self._records(stream) if r["event"] == "Classification decision"]
        assert decisions[0]["dimension"] == "region"
        assert decisions[0]["rule"] == "japan_dominant"
        assert decisions[0]["buckets"]["japan"] == 45.68
        assert decisions[0]["buckets"]["us"] == 30.12

    def test_console_rendering(self):
        stream = io.StringIO()
        configure_logging(stream=stream, include_timestamp=False)

        get_analytics_logger("folio_app.tests").info("Analytics engine initialized")

        assert "Analytics engine initialized" in stream.getvalue()
