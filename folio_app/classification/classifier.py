"""
Heuristic classification of funds from their composition breakdown.

Provider labels are free text in mixed languages (English and Spanish feeds
are both common), so labels are bucketed by case-insensitive substring
match before threshold rules are applied to the bucket totals.
"""

from dataclasses import asdict, dataclass
from typing import Any, Iterable, Mapping, Optional, Union

import structlog

from ..config.defaults import AssetClassParams, RegionParams
from ..data.models import AllocationEntry, FundComposition, RegionWeight
from ..data.normalizer import parse_weight
from ..logging.config import log_classification_decision
from ..models.metrics import AssetClass, ClassificationResult, Region
from .rules import Rule, always, first_match

logger = structlog.get_logger(__name__)

# Exclusive: an allocation label lands in the first bucket whose token it contains
ALLOCATION_TOKENS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("stocks", ("stock", "equity")),
    ("bonds", ("bond", "fixed")),
    ("cash", ("cash",)),
)

# Not exclusive: a region label adds to every bucket whose token it contains
REGION_TOKENS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("us", ("estados unidos", "united states", "usa")),
    ("europe", ("europa", "europe", "euro")),
    ("emerging", ("emergente", "emerging")),
    ("japan", ("japón", "japan")),
    ("asia", ("asia",)),
)


@dataclass
class AllocationBuckets:
    """Allocation weight totals, in percent"""
    stocks: float = 0.0
    bonds: float = 0.0
    cash: float = 0.0
    other: float = 0.0


@dataclass
class RegionBuckets:
    """Regional weight totals, in percent"""
    us: float = 0.0
    europe: float = 0.0
    emerging: float = 0.0
    japan: float = 0.0
    asia: float = 0.0


def accumulate_allocation(entries: Iterable[AllocationEntry]) -> AllocationBuckets:
    buckets = AllocationBuckets()
    for entry in entries:
        label = entry.label.lower()
        bucket = next(
            (name for name, tokens in ALLOCATION_TOKENS if any(t in label for t in tokens)),
            "other",
        )
        setattr(buckets, bucket, getattr(buckets, bucket) + entry.weight)
    return buckets


def accumulate_regions(entries: Iterable[RegionWeight]) -> RegionBuckets:
    buckets = RegionBuckets()
    for entry in entries:
        label = entry.label.lower()
        weight = parse_weight(entry.weight)
        for name, tokens in REGION_TOKENS:
            if any(t in label for t in tokens):
                setattr(buckets, name, getattr(buckets, name) + weight)
    return buckets


def asset_class_rules(params: AssetClassParams) -> list[Rule[AllocationBuckets, AssetClass]]:
    """Asset-class rules in priority order."""
    return [
        Rule("equity_majority", lambda b: b.stocks > params.equity_threshold,
             AssetClass.EQUITY),
        Rule("fixed_income_majority", lambda b: b.bonds > params.fixed_income_threshold,
             AssetClass.FIXED_INCOME),
        Rule("commodity_proxy",
             lambda b: (b.stocks + b.bonds) < params.commodity_max_core
             and b.other > params.commodity_min_other,
             AssetClass.COMMODITY),
        Rule("stocks_dominant", lambda b: b.stocks >= b.bonds, AssetClass.EQUITY),
        Rule("bonds_dominant", always, AssetClass.FIXED_INCOME),
    ]


def region_rules(params: RegionParams) -> list[Rule[RegionBuckets, Region]]:
    """Region rules in priority order."""
    return [
        Rule("north_america_majority", lambda b: b.us > params.north_america,
             Region.NORTH_AMERICA),
        Rule("europe_majority", lambda b: b.europe > params.europe, Region.EUROPE),
        Rule("japan_dominant",
             lambda b: b.japan > params.japan and b.japan > b.us and b.japan > b.europe,
             Region.JAPAN),
        Rule("emerging_majority", lambda b: b.emerging > params.emerging,
             Region.EMERGING_MARKETS),
        Rule("asia_pacific_majority", lambda b: b.asia > params.asia_pacific,
             Region.ASIA_PACIFIC),
        Rule("diversified", always, Region.GLOBAL),
    ]


class FundClassifier:
    """
    Maps a fund composition to an asset class and a region.

    Never fails: missing data resolves to Equity / Global.
    """

    def __init__(self, asset_class: Optional[AssetClassParams] = None,
                 region: Optional[RegionParams] = None):
        self.asset_class_rules = asset_class_rules(asset_class or AssetClassParams())
        self.region_rules = region_rules(region or RegionParams())

    def classify(self, composition: Union[FundComposition, Mapping[str, Any], None],
                 instrument_id: Optional[str] = None) -> ClassificationResult:
        """
        Classify a fund.

        Args:
            composition: FundComposition, the raw mapping it is built from, or None
            instrument_id: Only used for log context

        Returns:
            ClassificationResult, always fully populated
        """
        if composition is not None and not isinstance(composition, FundComposition):
            composition = FundComposition.from_dict(composition)

        if composition is None:
            logger.debug("No composition, using defaults", instrument_id=instrument_id)
            return ClassificationResult()

        return ClassificationResult(
            asset_class=self.determine_asset_class(composition.allocation, instrument_id),
            region=self.determine_region(composition.regions, instrument_id),
        )

    def determine_asset_class(self, allocation: Iterable[AllocationEntry],
                              instrument_id: Optional[str] = None) -> AssetClass:
        allocation = tuple(allocation)
        if not allocation:
            return AssetClass.EQUITY

        buckets = accumulate_allocation(allocation)
        rule = first_match(self.asset_class_rules, buckets)
        log_classification_decision(logger, "asset_class", rule.category.value, rule.name,
                                    asdict(buckets), instrument_id)
        return rule.category

    def determine_region(self, regions: Iterable[RegionWeight],
                         instrument_id: Optional[str] = None) -> Region:
        regions = tuple(regions)
        if not regions:
            return Region.GLOBAL

        buckets = accumulate_regions(regions)
        rule = first_match(self.region_rules, buckets)
        log_classification_decision(logger, "region", rule.category.value, rule.name,
                                    asdict(buckets), instrument_id)
        return rule.category


def classify(composition: Union[FundComposition, Mapping[str, Any], None]) -> ClassificationResult:
    """Classify a fund with the default thresholds."""
    return FundClassifier().classify(composition)
