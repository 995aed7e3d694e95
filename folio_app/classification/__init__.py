"""Fund auto-classification into asset-class and region buckets"""

from .classifier import (
    AllocationBuckets,
    FundClassifier,
    RegionBuckets,
    accumulate_allocation,
    accumulate_regions,
    asset_class_rules,
    classify,
    region_rules,
)
from .rules import Rule, first_match

__all__ = [
    "FundClassifier",
    "classify",
    "AllocationBuckets",
    "RegionBuckets",
    "accumulate_allocation",
    "accumulate_regions",
    "asset_class_rules",
    "region_rules",
    "Rule",
    "first_match",
]
