import re
from typing import Any, Optional

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT_RE = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))")

NEGATIVE_ANSWERS = ("não", "no")


def to_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    """Parse the leading integer of a free-text field ("10+" -> 10, "3 a 4" -> 3)."""

    if value is None:
        return default

    match = _LEADING_INT_RE.match(str(value))
    if not match:
        return default
    return int(match.group(1))


def to_float(value: Any, default: Optional[float] = None) -> Optional[float]:
    """Parse the leading decimal of a free-text field, accepting a comma separator."""

    if value is None:
        return default

    text = str(value).replace(",", ".")
    match = _LEADING_FLOAT_RE.match(text)
    if not match:
        return default
    return float(match.group(1))


def is_affirmative(value: Any) -> bool:
    """Yes/no flags are stored as "Sim"/"Não"; anything present and not a no counts as yes."""

    if not value:
        return False
    return str(value).lower() not in NEGATIVE_ANSWERS
