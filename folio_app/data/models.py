"""
Canonical input models for price histories and fund compositions.

Records here are what the analytics core consumes. `from_dict` constructors
are the ingestion boundary: they accept the loosely-typed shapes handed over
by provider adapters. Price entries raise MalformedDataError on anything
they cannot interpret; composition weights are read leniently, since a bad
breakdown must still classify. Once a record exists, the core trusts it.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional

from ..errors import MalformedDataError, MissingDataError
from ..utils.numbers import parse_weight
from ..utils.time import to_date


@dataclass(frozen=True, order=True)
class PriceHistoryEntry:
    """Single priced point of an instrument's history."""
    date: date         # Calendar date of the close
    price: float       # Non-negative close / NAV

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "PriceHistoryEntry":
        """
        Build an entry from {"date": ..., "price"|"value": ...}.

        Raises:
            MissingDataError: If the date or price is absent
            MalformedDataError: If the date or price cannot be interpreted
        """
        raw_date = raw.get("date")
        if raw_date is None:
            raise MissingDataError("Price history entry has no date", data_type="date")

        raw_price = raw.get("price", raw.get("value"))
        if raw_price is None:
            raise MissingDataError("Price history entry has no price", data_type="price")

        try:
            entry_date = to_date(raw_date)
        except (TypeError, ValueError) as e:
            raise MalformedDataError(
                f"Invalid history date: {raw_date!r}",
                raw_data=str(raw_date),
                expected_format="YYYY-MM-DD",
            ) from e

        if isinstance(raw_price, bool):
            raise MalformedDataError(f"Invalid price type: {type(raw_price).__name__}",
                                     raw_data=str(raw_price))
        try:
            price = float(raw_price)
        except (TypeError, ValueError) as e:
            raise MalformedDataError(
                f"Non-numeric price: {raw_price!r}",
                raw_data=str(raw_price),
                expected_format="number",
            ) from e

        if math.isnan(price) or math.isinf(price):
            raise MalformedDataError(f"Invalid price value: {price}", raw_data=str(raw_price))
        if price < 0:
            raise MalformedDataError(f"Negative price: {price}", raw_data=str(raw_price))

        return cls(date=entry_date, price=price)


@dataclass(frozen=True)
class AllocationEntry:
    """Asset allocation bucket as reported by the provider (e.g. "stockPosition")."""
    label: str
    weight: float      # Percent, 0-100 scale


@dataclass(frozen=True)
class RegionWeight:
    """Regional exposure; the weight stays as provider text until classification."""
    label: str
    weight: str


@dataclass(frozen=True)
class HoldingEntry:
    """Top holding of a fund."""
    label: str
    weight: float
    symbol: Optional[str] = None


@dataclass(frozen=True)
class FundComposition:
    """Composition breakdown of a fund. Every part is optional."""
    allocation: tuple[AllocationEntry, ...] = field(default_factory=tuple)
    regions: tuple[RegionWeight, ...] = field(default_factory=tuple)
    sectors: tuple[AllocationEntry, ...] = field(default_factory=tuple)
    holdings: tuple[HoldingEntry, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, raw: Optional[Mapping[str, Any]]) -> Optional["FundComposition"]:
        """
        Build a composition from the fund-data collaborator's shape.

        Lists may be missing or null. Entries use either "name" or "label";
        entries that are not mappings are skipped. Weights go through
        parse_weight, so "85%" reads as 85 and null or unparseable text as 0.
        """
        if raw is None:
            return None

        return cls(
            allocation=tuple(
                AllocationEntry(label=_label(item), weight=_numeric_weight(item))
                for item in _entries(raw, "allocation")
            ),
            regions=tuple(
                RegionWeight(label=_label(item), weight=str(item.get("weight", "")))
                for item in _entries(raw, "regions")
            ),
            sectors=tuple(
                AllocationEntry(label=_label(item), weight=_numeric_weight(item))
                for item in _entries(raw, "sectors")
            ),
            holdings=tuple(
                HoldingEntry(label=_label(item), weight=_numeric_weight(item),
                             symbol=item.get("symbol"))
                for item in _entries(raw, "holdings")
            ),
        )


def _label(item: Mapping[str, Any]) -> str:
    return str(item.get("label", item.get("name", "")))


def _entries(raw: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    items = raw.get(key)
    if not isinstance(items, (list, tuple)):
        return []
    return [item for item in items if isinstance(item, Mapping)]


def _numeric_weight(item: Mapping[str, Any]) -> float:
    return parse_weight(item.get("weight"))
