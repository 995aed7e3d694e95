"""
Risk metrics for fund price histories.

Cumulative and annualized return, annualized volatility, maximum drawdown,
Sharpe ratio and, against a benchmark, beta and alpha. Like the trailing
returns, every figure is None when the data cannot support it.
"""

import math
from typing import Optional, Sequence

import structlog

from ..config.defaults import RiskParams
from ..data.models import PriceHistoryEntry
from ..data.normalizer import HistoryInput, normalize_history
from ..models.metrics import FundRiskMetrics
from ..utils.time import years_between
from .performance import calculate_return

logger = structlog.get_logger(__name__)


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _sample_variance(values: Sequence[float]) -> Optional[float]:
    if len(values) < 2:
        return None
    mean = _mean(values)
    return sum((v - mean) ** 2 for v in values) / (len(values) - 1)


def _sample_covariance(x: Sequence[float], y: Sequence[float]) -> Optional[float]:
    if len(x) != len(y) or len(x) < 2:
        return None
    mean_x = _mean(x)
    mean_y = _mean(y)
    return sum((a - mean_x) * (b - mean_y) for a, b in zip(x, y)) / (len(x) - 1)


def log_returns(prices: Sequence[float]) -> list[float]:
    """
    Daily log returns between consecutive prices.

    Steps touching a non-positive price have no defined log return and are
    skipped.
    """
    return [
        math.log(curr / prev)
        for prev, curr in zip(prices, prices[1:])
        if prev > 0 and curr > 0
    ]


def annualized_return(series: Sequence[PriceHistoryEntry],
                      days_per_year: float = 365.25) -> Optional[float]:
    """
    Compound annual growth rate in percent.

    Falls back to the cumulative return when first and last entries share a
    date.
    """
    if len(series) < 2:
        return None

    first, last = series[0], series[-1]
    if first.price <= 0:
        return None

    years = years_between(first.date, last.date, days_per_year)
    if years <= 0:
        return calculate_return(last.price, first.price)

    return ((last.price / first.price) ** (1 / years) - 1) * 100


def annualized_volatility(series: Sequence[PriceHistoryEntry],
                          trading_days: int = 252) -> Optional[float]:
    """Annualized standard deviation of daily log returns, in percent."""
    variance = _sample_variance(log_returns([entry.price for entry in series]))
    if variance is None:
        return None
    return math.sqrt(variance) * math.sqrt(trading_days) * 100


def max_drawdown(series: Sequence[PriceHistoryEntry]) -> Optional[float]:
    """Largest peak-to-trough decline, as a positive percentage."""
    if len(series) < 2:
        return None

    worst = 0.0
    peak = 0.0
    for entry in series:
        peak = max(peak, entry.price)
        if peak > 0:
            worst = min(worst, (entry.price - peak) / peak)
    return abs(worst * 100)


def sharpe_ratio(series: Sequence[PriceHistoryEntry], risk_free_rate: float = 0.03,
                 trading_days: int = 252, days_per_year: float = 365.25) -> Optional[float]:
    """
    Sharpe ratio

    Sharpe = (CAGR - risk_free_rate) / annualized volatility, all as fractions
    """
    cagr = annualized_return(series, days_per_year)
    volatility = annualized_volatility(series, trading_days)
    if cagr is None or volatility is None or volatility == 0:
        return None
    return (cagr / 100 - risk_free_rate) / (volatility / 100)


def _aligned_log_returns(series: Sequence[PriceHistoryEntry],
                         benchmark: Sequence[PriceHistoryEntry],
                         min_overlap: int) -> Optional[tuple[list[float], list[float]]]:
    """Log returns of both series over their common dates."""
    # Last price wins when a date repeats
    fund_prices = {entry.date: entry.price for entry in series}
    bench_prices = {entry.date: entry.price for entry in benchmark}

    common = sorted(fund_prices.keys() & bench_prices.keys())
    if len(common) < min_overlap:
        return None

    fund_returns = []
    bench_returns = []
    for prev, curr in zip(common, common[1:]):
        prices = (fund_prices[prev], fund_prices[curr], bench_prices[prev], bench_prices[curr])
        if min(prices) <= 0:
            continue
        fund_returns.append(math.log(prices[1] / prices[0]))
        bench_returns.append(math.log(prices[3] / prices[2]))
    return fund_returns, bench_returns


def beta(series: Sequence[PriceHistoryEntry], benchmark: Sequence[PriceHistoryEntry],
         min_overlap: int = 30) -> Optional[float]:
    """
    Sensitivity of the fund to its benchmark

    Beta = Cov(fund, benchmark) / Var(benchmark), over log returns on common dates
    """
    aligned = _aligned_log_returns(series, benchmark, min_overlap)
    if aligned is None:
        return None

    fund_returns, bench_returns = aligned
    covariance = _sample_covariance(fund_returns, bench_returns)
    variance = _sample_variance(bench_returns)
    if covariance is None or not variance:
        return None
    return covariance / variance


def alpha(series: Sequence[PriceHistoryEntry], benchmark: Sequence[PriceHistoryEntry],
          risk_free_rate: float = 0.03, min_overlap: int = 30,
          days_per_year: float = 365.25) -> Optional[float]:
    """
    Annualized excess return over the CAPM expectation, in percent

    Alpha = R_fund - (R_f + Beta * (R_bench - R_f))
    """
    fund_beta = beta(series, benchmark, min_overlap)
    fund_cagr = annualized_return(series, days_per_year)
    bench_cagr = annualized_return(benchmark, days_per_year)
    if fund_beta is None or fund_cagr is None or bench_cagr is None:
        return None

    fund_cagr /= 100
    bench_cagr /= 100
    return (fund_cagr - (risk_free_rate + fund_beta * (bench_cagr - risk_free_rate))) * 100


def compute_risk_metrics(history: HistoryInput, benchmark: HistoryInput = None,
                         params: Optional[RiskParams] = None) -> FundRiskMetrics:
    """
    Compute all risk metrics for a price history.

    Args:
        history: Fund price history in any order
        benchmark: Optional benchmark price history for beta and alpha
        params: Risk parameters, defaults to RiskParams()

    Returns:
        FundRiskMetrics with None for anything the data cannot support
    """
    params = params or RiskParams()
    series = normalize_history(history)
    if len(series) < 2:
        logger.debug("Not enough history for risk metrics", points=len(series))
        return FundRiskMetrics()

    fund_beta = None
    fund_alpha = None
    if benchmark:
        bench_series = normalize_history(benchmark)
        fund_beta = beta(series, bench_series, params.min_overlap)
        fund_alpha = alpha(series, bench_series, params.risk_free_rate,
                           params.min_overlap, params.days_per_year)
        if fund_beta is None:
            logger.debug("Insufficient benchmark overlap", required=params.min_overlap,
                         fund_points=len(series), benchmark_points=len(bench_series))

    return FundRiskMetrics(
        cumulative_return=calculate_return(series[-1].price, series[0].price),
        annualized_return=annualized_return(series, params.days_per_year),
        volatility=annualized_volatility(series, params.trading_days),
        max_drawdown=max_drawdown(series),
        sharpe_ratio=sharpe_ratio(series, params.risk_free_rate,
                                  params.trading_days, params.days_per_year),
        beta=fund_beta,
        alpha=fund_alpha,
    )
