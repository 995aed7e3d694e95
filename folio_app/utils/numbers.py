"""Lenient parsing of provider weight values."""

import math
import re
from typing import Any

# Leading signed number ("45", "45.3%", ".5"). A comma is read as a decimal
# separator, as Spanish feeds write it, so "45,3" is 45.3 where a plain
# leading-integer read would stop at 45.
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:[.,]\d*)?|[.,]\d+))")


def parse_weight(text: Any) -> float:
    """
    Parse a provider weight into a number.

    Only the leading number counts, so units and trailing text are ignored
    ("45.3 %" -> 45.3). Missing, boolean or unparseable values parse as 0.0.

    Args:
        text: Weight as text or number

    Returns:
        Parsed weight, 0.0 when unparseable
    """
    if isinstance(text, bool) or text is None:
        return 0.0
    if isinstance(text, (int, float)):
        value = float(text)
        return value if math.isfinite(value) else 0.0

    match = _LEADING_NUMBER.match(str(text))
    if not match:
        return 0.0
    return float(match.group(1).replace(",", "."))
