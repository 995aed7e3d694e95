"""Result models for performance, risk and classification analytics"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Optional

import orjson

PERIOD_KEYS = ("1M", "3M", "6M", "1Y", "YTD", "Total")


class AssetClass(str, Enum):
    """What a fund predominantly holds."""
    EQUITY = "Equity"
    FIXED_INCOME = "Fixed Income"
    REAL_ESTATE = "Real Estate"
    COMMODITY = "Commodity"
    CASH = "Cash"
    CRYPTO = "Crypto"


class Region(str, Enum):
    """A fund's predominant geographic exposure."""
    GLOBAL = "Global"
    NORTH_AMERICA = "North America"
    EUROPE = "Europe"
    EMERGING_MARKETS = "Emerging Markets"
    ASIA_PACIFIC = "Asia Pacific"
    JAPAN = "Japan"


@dataclass(frozen=True)
class PerformanceMetrics:
    """Trailing returns in percent; None marks a window with no data."""
    one_month: Optional[float] = None
    three_months: Optional[float] = None
    six_months: Optional[float] = None
    one_year: Optional[float] = None
    ytd: Optional[float] = None
    total: Optional[float] = None

    @classmethod
    def unavailable(cls) -> "PerformanceMetrics":
        """Metrics with every window unavailable."""
        return cls()

    def __getitem__(self, key: str) -> Optional[float]:
        return self.to_dict()[key]

    def __iter__(self) -> Iterator[str]:
        return iter(PERIOD_KEYS)

    def items(self) -> list[tuple[str, Optional[float]]]:
        return list(self.to_dict().items())

    def available(self) -> dict[str, float]:
        """Only the windows that could be computed."""
        return {k: v for k, v in self.to_dict().items() if v is not None}

    def to_dict(self) -> dict[str, Optional[float]]:
        return {
            "1M": self.one_month,
            "3M": self.three_months,
            "6M": self.six_months,
            "1Y": self.one_year,
            "YTD": self.ytd,
            "Total": self.total,
        }

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_dict())


@dataclass(frozen=True)
class FundRiskMetrics:
    """Risk figures derived from a fund's price history"""
    cumulative_return: Optional[float] = None   # %
    annualized_return: Optional[float] = None   # CAGR, %
    volatility: Optional[float] = None          # annualized, %
    max_drawdown: Optional[float] = None        # positive magnitude, %
    sharpe_ratio: Optional[float] = None
    beta: Optional[float] = None                # only with a benchmark
    alpha: Optional[float] = None               # annualized, %, only with a benchmark

    def has_benchmark_metrics(self) -> bool:
        return self.beta is not None and self.alpha is not None

    def to_dict(self) -> dict[str, Optional[float]]:
        return {
            "cumulativeReturn": self.cumulative_return,
            "annualizedReturn": self.annualized_return,
            "volatility": self.volatility,
            "maxDrawdown": self.max_drawdown,
            "sharpeRatio": self.sharpe_ratio,
            "beta": self.beta,
            "alpha": self.alpha,
        }

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_dict())


@dataclass(frozen=True)
class ClassificationResult:
    """Asset class and region of a fund; always fully populated."""
    asset_class: AssetClass = AssetClass.EQUITY
    region: Region = Region.GLOBAL

    def to_dict(self) -> dict[str, str]:
        return {"assetClass": self.asset_class.value, "region": self.region.value}

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_dict())


@dataclass(frozen=True)
class InstrumentAnalytics:
    """Everything the dashboard shows for one instrument"""
    instrument_id: str
    performance: PerformanceMetrics
    risk: FundRiskMetrics
    classification: ClassificationResult

    def to_dict(self) -> dict[str, Any]:
        return {
            "instrumentId": self.instrument_id,
            "performance": self.performance.to_dict(),
            "risk": self.risk.to_dict(),
            "classification": self.classification.to_dict(),
        }

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_dict())
