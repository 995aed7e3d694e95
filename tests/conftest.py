"""Pytest configuration and shared fixtures."""

import pytest
from datetime import date, timedelta
from typing import Any, Dict, List

from folio_app.data.models import PriceHistoryEntry


def _evenly_spaced(start: date, prices: List[float], step_days: int = 1) -> List[PriceHistoryEntry]:
    return [
        PriceHistoryEntry(date=start + timedelta(days=i * step_days), price=price)
        for i, price in enumerate(prices)
    ]


@pytest.fixture
def make_history():
    """Factory for evenly spaced histories starting at a given date."""
    return _evenly_spaced


@pytest.fixture
def scenario_history() -> List[PriceHistoryEntry]:
    """Three-point history spanning a year boundary."""
    return [
        PriceHistoryEntry(date=date(2023, 1, 1), price=100.0),
        PriceHistoryEntry(date=date(2023, 6, 1), price=110.0),
        PriceHistoryEntry(date=date(2024, 1, 1), price=120.0),
    ]


@pytest.fixture
def daily_history() -> List[PriceHistoryEntry]:
    """Two years of daily prices ending 2024-06-30."""
    start = date(2022, 7, 1)
    end = date(2024, 6, 30)
    days = (end - start).days + 1
    return _evenly_spaced(start, [100.0 + i * 0.1 for i in range(days)])


@pytest.fixture
def equity_composition() -> Dict[str, Any]:
    """Provider-shaped composition of a US equity fund."""
    return {
        "allocation": [
            {"name": "stockPosition", "weight": 98.5},
            {"name": "cashPosition", "weight": 1.5},
        ],
        "regions": [
            {"name": "United States", "weight": "72.4"},
            {"name": "Europe", "weight": "15.1"},
            {"name": "Japan", "weight": "5.0"},
        ],
        "holdings": [
            {"name": "Apple Inc", "weight": 6.8, "symbol": "AAPL"},
        ],
    }
