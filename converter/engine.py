# converter/engine.py
from __future__ import annotations
import math
import re
from typing import Any, Mapping, Optional, Tuple

DISPLAY_DECIMALS = 2
ZERO_DISPLAY = f"{0:.{DISPLAY_DECIMALS}f}"  # "0.00"

# optional digits, optional single point, optional digits (ASCII only)
_AMOUNT_RE = re.compile(r"[0-9]*\.?[0-9]*")
# same language, but at least one digit
_DECIMAL_RE = re.compile(r"[0-9]+\.?[0-9]*|\.[0-9]+")


def parse_amount(amount: Any) -> Optional[float]:
    """Return a finite float, or None when `amount` is not a number."""
    if isinstance(amount, bool):
        return None
    if isinstance(amount, str):
        amount = amount.strip()
        if not _DECIMAL_RE.fullmatch(amount):
            return None
    try:
        value = float(amount)
    except (TypeError, ValueError, OverflowError):
        return None
    return value if math.isfinite(value) else None


def cross_rate(source: str, target: str, table: Mapping[str, float]) -> Optional[float]:
    """Units of `target` per unit of `source`; None if either code is unknown."""
    if source not in table or target not in table:
        return None
    return table[target] / table[source]


def convert(amount: Any, source: str, target: str, table: Mapping[str, float]) -> str:
    """
    (amount / rate[source]) * rate[target], formatted to DISPLAY_DECIMALS.
    Unparsable or non-positive amounts and unknown codes give ZERO_DISPLAY.
    """
    value = parse_amount(amount)
    if value is None or value <= 0 or not table:
        return ZERO_DISPLAY
    if source not in table or target not in table:
        return ZERO_DISPLAY
    result = (value / table[source]) * table[target]
    if not math.isfinite(result):
        return ZERO_DISPLAY
    return f"{result:.{DISPLAY_DECIMALS}f}"


def swap(source: str, target: str) -> Tuple[str, str]:
    return target, source


def sanitize_amount_input(raw: str) -> Optional[str]:
    """Accept a non-negative decimal literal in progress ("", "5", "5.", ".5"); None means rejected."""
    if not isinstance(raw, str):
        return None
    return raw if _AMOUNT_RE.fullmatch(raw) else None
