"""Tests for priority-ordered rule lists"""

from folio_app.classification.classifier import (
    AllocationBuckets,
    RegionBuckets,
    asset_class_rules,
    region_rules,
)
from folio_app.classification.rules import Rule, always, first_match
from folio_app.config.defaults import AssetClassParams, RegionParams
from folio_app.models.metrics import AssetClass, Region


class TestFirstMatch:
    """Test rule evaluation order"""

    def setup_method(self):
        self.rules = [
            Rule("big", lambda v: v > 100, "big"),
            Rule("positive", lambda v: v > 0, "positive"),
            Rule("other", always, "other"),
        ]

    def test_first_matching_rule_wins(self):
        assert first_match(self.rules, 500).name == "big"
        assert first_match(self.rules, 5).name == "positive"

    def test_catch_all(self):
        assert first_match(self.rules, -1).category == "other"

    def test_no_match(self):
        assert first_match(self.rules[:2], -1) is None

    def test_empty_rules(self):
        assert first_match([], 1) is None


class TestRuleLists:
    """Rule lists can be exercised independently"""

    def test_asset_class_rule_order(self):
        names = [rule.name for rule in asset_class_rules(AssetClassParams())]
        assert names == [
            "equity_majority",
            "fixed_income_majority",
            "commodity_proxy",
            "stocks_dominant",
            "bonds_dominant",
        ]

    def test_region_rule_order(self):
        names = [rule.name for rule in region_rules(RegionParams())]
        assert names == [
            "north_america_majority",
            "europe_majority",
            "japan_dominant",
            "emerging_majority",
            "asia_pacific_majority",
            "diversified",
        ]

    def test_asset_class_lists_end_with_catch_all(self):
        rule = first_match(asset_class_rules(AssetClassParams()), AllocationBuckets())
        assert rule.category is AssetClass.EQUITY

        rule = first_match(asset_class_rules(AssetClassParams()), AllocationBuckets(bonds=1.0))
        assert rule.name == "bonds_dominant"
        assert rule.category is AssetClass.FIXED_INCOME

    def test_region_list_ends_with_catch_all(self):
        rule = first_match(region_rules(RegionParams()), RegionBuckets())
        assert rule.category is Region.GLOBAL

    def test_individual_rule(self):
        japan = region_rules(RegionParams())[2]

        assert japan.matches(RegionBuckets(japan=41.0, us=40.0, europe=19.0))
        assert not japan.matches(RegionBuckets(japan=41.0, us=41.0))
