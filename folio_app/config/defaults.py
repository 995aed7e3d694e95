"""Default configuration parameters for the analytics layer."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LookbackParams:
    """Trailing-return windows in calendar days."""
    one_month: int = 30
    three_months: int = 90
    six_months: int = 180
    one_year: int = 365


@dataclass(frozen=True)
class AssetClassParams:
    """Allocation thresholds (percent) for asset-class classification."""
    equity_threshold: float = 70.0                   # stocks above this -> Equity
    fixed_income_threshold: float = 70.0             # bonds above this -> Fixed Income
    commodity_max_core: float = 20.0                 # stocks + bonds below this ...
    commodity_min_other: float = 50.0                # ... and other above this -> Commodity


@dataclass(frozen=True)
class RegionParams:
    """Regional weight thresholds (percent) for region classification."""
    north_america: float = 60.0
    europe: float = 60.0
    japan: float = 40.0
    emerging: float = 50.0
    asia_pacific: float = 60.0


@dataclass(frozen=True)
class RiskParams:
    """Risk metric parameters."""
    trading_days: int = 252            # Annualization factor for daily volatility
    risk_free_rate: float = 0.03       # Annual, as a fraction
    min_overlap: int = 30              # Common dates required for beta/alpha
    days_per_year: float = 365.25      # Calendar-day year used for CAGR


@dataclass(frozen=True)
class HistoryParams:
    """Chart history reduction parameters."""
    recent_points: int = 30
    one_year_days: int = 365


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    lookback: LookbackParams
    asset_class: AssetClassParams
    region: RegionParams
    risk: RiskParams
    history: HistoryParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        lookback=LookbackParams(),
        asset_class=AssetClassParams(),
        region=RegionParams(),
        risk=RiskParams(),
        history=HistoryParams(),
    )
