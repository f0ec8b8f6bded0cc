"""Money / rounding helpers.

Centralized so validation, persistence, and totals use identical rounding
semantics.
"""

from __future__ import annotations
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

CENT = Decimal("0.01")
# Plain ASCII decimal literal, optional exponent; no underscores or other digit sets.
_NUMERIC_TEXT = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def to_money(value: Decimal) -> float:
    """Round half-up to cents and return a float for storage."""
    return float(value.quantize(CENT, rounding=ROUND_HALF_UP))


def parse_amount(value: Any) -> Optional[Decimal]:
    """Return ``value`` as a finite Decimal, or None when it is not numeric.

    Accepts ints, floats, and numeric strings (surrounding whitespace allowed).
    Booleans are rejected even though ``bool`` subclasses ``int``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        text = str(value)
    elif isinstance(value, str):
        text = value.strip()
        if not _NUMERIC_TEXT.fullmatch(text):
            return None
    else:
        return None
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return None
    if not parsed.is_finite():
        return None
    return parsed
