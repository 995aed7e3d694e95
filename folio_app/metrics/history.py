"""Price history reduction for chart consumers"""

from enum import Enum
from typing import Callable, Hashable, Optional, Sequence

from ..config.defaults import HistoryParams
from ..data.models import PriceHistoryEntry
from ..data.normalizer import HistoryInput, normalize_history
from ..utils.time import days_before, start_of_year


class Interval(str, Enum):
    DAILY = "daily"
    MONTHLY = "monthly"
    ANNUAL = "annual"


class ChartRange(str, Enum):
    RECENT = "recent"                # last N points as-is
    YEAR_TO_DATE = "year_to_date"    # current calendar year as-is
    ONE_YEAR = "one_year"            # last 365 days, month-ends
    ALL = "all"                      # full history, month-ends


def _last_per_period(series: Sequence[PriceHistoryEntry],
                     period_key: Callable[[PriceHistoryEntry], Hashable]) -> list[PriceHistoryEntry]:
    """Keep the last entry of each period; `series` must be sorted ascending."""
    last: dict[Hashable, PriceHistoryEntry] = {}
    for entry in series:
        last[period_key(entry)] = entry
    return list(last.values())


def _month(entry: PriceHistoryEntry) -> tuple[int, int]:
    return entry.date.year, entry.date.month


def _year(entry: PriceHistoryEntry) -> int:
    return entry.date.year


def aggregate_history(history: HistoryInput, interval: Interval = Interval.DAILY) -> list[PriceHistoryEntry]:
    """
    Reduce a history to one point per day, month or year.

    Monthly and annual reduction keep the last close of each period.

    Args:
        history: Price history in any order
        interval: Interval (or its string value)

    Returns:
        Entries sorted ascending by date
    """
    series = normalize_history(history)
    interval = Interval(interval)

    if interval is Interval.MONTHLY:
        return _last_per_period(series, _month)
    if interval is Interval.ANNUAL:
        return _last_per_period(series, _year)
    return list(series)


def filter_history(history: HistoryInput, chart_range: ChartRange,
                   params: Optional[HistoryParams] = None) -> list[PriceHistoryEntry]:
    """
    Select and thin the part of a history shown for a chart range.

    Ranges are anchored on the latest entry, not on today's date.

    Args:
        history: Price history in any order
        chart_range: ChartRange (or its string value)
        params: History parameters, defaults to HistoryParams()

    Returns:
        Entries sorted ascending by date; empty for an empty history
    """
    params = params or HistoryParams()
    series = normalize_history(history)
    chart_range = ChartRange(chart_range)
    if not series:
        return []

    latest = series[-1].date

    if chart_range is ChartRange.RECENT:
        return list(series[-params.recent_points:])

    if chart_range is ChartRange.YEAR_TO_DATE:
        year_start = start_of_year(latest)
        return [entry for entry in series if entry.date >= year_start]

    if chart_range is ChartRange.ONE_YEAR:
        cutoff = days_before(latest, params.one_year_days)
        return _last_per_period([entry for entry in series if entry.date >= cutoff], _month)

    return _last_per_period(series, _month)
