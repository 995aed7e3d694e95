"""Unit tests for input models and normalization."""

import pytest
from datetime import date, datetime, timezone

from folio_app.data.models import (
    AllocationEntry,
    FundComposition,
    HoldingEntry,
    PriceHistoryEntry,
    RegionWeight,
)
from folio_app.data.normalizer import normalize_history, parse_weight
from folio_app.errors import MalformedDataError, MissingDataError


class TestPriceHistoryEntry:
    """Test building history entries from provider mappings."""

    def test_iso_date_and_price(self) -> None:
        entry = PriceHistoryEntry.from_dict({"date": "2024-01-31", "price": 101.5})
        assert entry == PriceHistoryEntry(date(2024, 1, 31), 101.5)

    def test_value_key(self) -> None:
        entry = PriceHistoryEntry.from_dict({"date": "2024-01-31", "value": "99.9"})
        assert entry.price == 99.9

    def test_timestamp_and_datetime(self) -> None:
        assert PriceHistoryEntry.from_dict(
            {"date": "2024-01-31T16:00:00Z", "price": 1}
        ).date == date(2024, 1, 31)
        assert PriceHistoryEntry.from_dict(
            {"date": datetime(2024, 1, 31, 9, tzinfo=timezone.utc), "price": 1}
        ).date == date(2024, 1, 31)

    def test_missing_fields(self) -> None:
        with pytest.raises(MissingDataError) as exc_info:
            PriceHistoryEntry.from_dict({"price": 1})
        assert exc_info.value.data_type == "date"

        with pytest.raises(MissingDataError):
            PriceHistoryEntry.from_dict({"date": "2024-01-31"})

    @pytest.mark.parametrize("raw", [
        {"date": "31/01/2024", "price": 1},
        {"date": 20240131, "price": 1},
        {"date": "2024-01-31", "price": "abc"},
        {"date": "2024-01-31", "price": -1},
        {"date": "2024-01-31", "price": float("nan")},
        {"date": "2024-01-31", "price": True},
    ])
    def test_malformed(self, raw) -> None:
        with pytest.raises(MalformedDataError):
            PriceHistoryEntry.from_dict(raw)

    def test_entries_sort_by_date_then_price(self) -> None:
        entries = [
            PriceHistoryEntry(date(2024, 2, 1), 5.0),
            PriceHistoryEntry(date(2024, 1, 1), 9.0),
            PriceHistoryEntry(date(2024, 2, 1), 1.0),
        ]
        assert [e.price for e in sorted(entries)] == [9.0, 1.0, 5.0]


class TestFundComposition:
    """Test building compositions from provider mappings."""

    def test_none(self) -> None:
        assert FundComposition.from_dict(None) is None

    def test_full_mapping(self, equity_composition) -> None:
        composition = FundComposition.from_dict(equity_composition)

        assert composition.allocation[0] == AllocationEntry("stockPosition", 98.5)
        assert composition.regions[0] == RegionWeight("United States", "72.4")
        assert composition.holdings[0] == HoldingEntry("Apple Inc", 6.8, "AAPL")
        assert composition.sectors == ()

    def test_label_key_and_null_lists(self) -> None:
        composition = FundComposition.from_dict({
            "allocation": [{"label": "bonds", "weight": "80"}],
            "regions": None,
        })

        assert composition.allocation == (AllocationEntry("bonds", 80.0),)
        assert composition.regions == ()

    def test_numeric_region_weight_kept_as_text(self) -> None:
        composition = FundComposition.from_dict({"regions": [{"name": "Japan", "weight": 45}]})
        assert composition.regions[0].weight == "45"

    def test_lenient_weights(self) -> None:
        composition = FundComposition.from_dict({
            "allocation": [
                {"name": "stockPosition", "weight": "85%"},
                {"name": "bondPosition", "weight": None},
                {"name": "other", "weight": "lots"},
            ],
            "holdings": [{"name": "Apple", "weight": "4,5"}],
        })

        assert [e.weight for e in composition.allocation] == [85.0, 0.0, 0.0]
        assert composition.holdings[0].weight == pytest.approx(4.5)

    def test_skips_non_mapping_entries(self) -> None:
        composition = FundComposition.from_dict({
            "allocation": ["stocks", {"name": "bonds", "weight": 80}],
            "sectors": 5,
        })

        assert composition.allocation == (AllocationEntry("bonds", 80.0),)
        assert composition.sectors == ()


class TestNormalizeHistory:
    """Test history normalization."""

    def test_empty(self) -> None:
        assert normalize_history(None) == ()
        assert normalize_history([]) == ()

    def test_sorts_mixed_input(self) -> None:
        history = normalize_history([
            {"date": "2024-03-01", "price": 3},
            PriceHistoryEntry(date(2024, 1, 1), 1.0),
            {"date": "2024-02-01", "value": 2},
        ])

        assert [e.price for e in history] == [1.0, 2.0, 3.0]

    def test_accepts_generators(self) -> None:
        history = normalize_history(PriceHistoryEntry(date(2024, 1, d), float(d)) for d in (3, 1, 2))
        assert [e.date.day for e in history] == [1, 2, 3]


class TestParseWeight:
    """Test provider weight text parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("45", 45.0),
        ("45.3", 45.3),
        ("45.3 %", 45.3),
        ("45,3", 45.3),
        ("  12%", 12.0),
        (".5", 0.5),
        ("-2.5", -2.5),
        (30, 30.0),
        (12.5, 12.5),
    ])
    def test_parses_leading_number(self, text, expected) -> None:
        assert parse_weight(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["", "n/a", "%", None, float("nan"), "abc 45"])
    def test_unparseable_is_zero(self, text) -> None:
        assert parse_weight(text) == 0.0
