"""Depth budget validation for menu trees."""

import math


def is_int(value: object) -> bool:
    """Check whether a value is unambiguously a whole number.

    Accepts ints, finite whole floats and decimal strings such as "3",
    " 2 " or "4.0". Booleans, fractions, NaN, infinities and malformed
    strings are rejected.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value) and value.is_integer()
    if isinstance(value, str):
        text = value.strip()
        if not text or "_" in text or text.lower().startswith(("0x", "0o", "0b")):
            return False
        try:
            number = float(text)
        except ValueError:
            return False
        return math.isfinite(number) and number.is_integer()
    return False


def resolve_levels(value: object, default: int = 1) -> int:
    """Return value as an int depth budget, or default when it is not one."""
    if not is_int(value):
        return default
    if isinstance(value, (int, float)):
        return int(value)
    return int(float(str(value).strip()))
