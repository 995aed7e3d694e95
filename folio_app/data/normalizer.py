"""
Normalization of price histories and provider weight text.

Callers may pass histories in any order, with repeated dates, as model
instances or as plain mappings. Everything downstream works on the sorted
tuple produced here.
"""

from typing import Any, Iterable, Mapping, Optional, Union

from ..utils.numbers import parse_weight
from .models import PriceHistoryEntry

__all__ = ["HistoryInput", "coerce_entry", "normalize_history", "parse_weight"]

HistoryInput = Optional[Iterable[Union[PriceHistoryEntry, Mapping[str, Any]]]]


def coerce_entry(raw: Union[PriceHistoryEntry, Mapping[str, Any]]) -> PriceHistoryEntry:
    """Return `raw` as a PriceHistoryEntry, building it from a mapping if needed."""
    if isinstance(raw, PriceHistoryEntry):
        return raw
    return PriceHistoryEntry.from_dict(raw)


def normalize_history(history: HistoryInput) -> tuple[PriceHistoryEntry, ...]:
    """
    Sort a price history ascending by date.

    Entries sharing a date are ordered by price, so the result is the same
    for any permutation of the input.

    Args:
        history: Entries or mappings in any order; None is treated as empty

    Returns:
        Tuple of entries sorted by (date, price)

    Raises:
        MalformedDataError: If a mapping cannot be turned into an entry
    """
    if not history:
        return ()
    return tuple(sorted(coerce_entry(item) for item in history))

