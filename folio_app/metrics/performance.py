"""Trailing-return calculations over instrument price histories"""

from bisect import bisect_right
from datetime import date
from typing import Optional, Sequence

import structlog

from ..config.defaults import LookbackParams
from ..data.models import PriceHistoryEntry
from ..data.normalizer import HistoryInput, normalize_history
from ..models.metrics import PerformanceMetrics
from ..utils.time import days_before, previous_year_end

logger = structlog.get_logger(__name__)


def price_on_or_before(history: Sequence[PriceHistoryEntry], target: date) -> Optional[float]:
    """
    Most recent price at or before `target` (last observation carried forward).

    Args:
        history: Entries sorted ascending by date
        target: Reference date

    Returns:
        Price of the latest entry dated <= target, or None if every entry is newer
    """
    index = bisect_right(history, target, key=lambda entry: entry.date)
    if index == 0:
        return None
    return history[index - 1].price


def calculate_return(current_price: float, past_price: Optional[float]) -> Optional[float]:
    """
    Percentage return from `past_price` to `current_price`

    return% = (current / past - 1) * 100

    Returns:
        Return in percent, or None if the past price is missing or zero
    """
    if past_price is None or past_price == 0:
        return None
    return (current_price / past_price - 1) * 100


class PerformanceCalculator:
    """
    Computes the fixed set of trailing returns for one price history.

    Holds only immutable lookback configuration; every call depends on its
    argument alone.
    """

    def __init__(self, lookback: Optional[LookbackParams] = None):
        self.lookback = lookback or LookbackParams()

    def compute(self, history: HistoryInput) -> PerformanceMetrics:
        """
        Compute 1M/3M/6M/1Y/YTD/Total returns.

        Args:
            history: Price history in any order, possibly with repeated dates

        Returns:
            PerformanceMetrics; windows without a reference price are None
        """
        series = normalize_history(history)
        if len(series) < 2:
            logger.debug("Not enough history for returns", points=len(series))
            return PerformanceMetrics.unavailable()

        current = series[-1]

        def trailing(days: int, window: str) -> Optional[float]:
            past_price = price_on_or_before(series, days_before(current.date, days))
            if past_price is None:
                logger.debug("Lookback window precedes history", window=window,
                             first_date=series[0].date.isoformat(),
                             current_date=current.date.isoformat())
            return calculate_return(current.price, past_price)

        # Strict reference: last close of the previous year, no in-year fallback
        ytd_price = price_on_or_before(series, previous_year_end(current.date))
        if ytd_price is None:
            logger.debug("No close before current year", window="YTD",
                         first_date=series[0].date.isoformat())

        return PerformanceMetrics(
            one_month=trailing(self.lookback.one_month, "1M"),
            three_months=trailing(self.lookback.three_months, "3M"),
            six_months=trailing(self.lookback.six_months, "6M"),
            one_year=trailing(self.lookback.one_year, "1Y"),
            ytd=calculate_return(current.price, ytd_price),
            total=calculate_return(current.price, series[0].price),
        )


def compute_metrics(history: HistoryInput, lookback: Optional[LookbackParams] = None) -> PerformanceMetrics:
    """
    Compute trailing returns for a price history.

    Args:
        history: Price history in any order; None or fewer than 2 entries
            yields all-unavailable metrics
        lookback: Optional window lengths, defaults to 30/90/180/365 days

    Returns:
        PerformanceMetrics
    """
    return PerformanceCalculator(lookback).compute(history)
