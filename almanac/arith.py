"""
almanac/arith.py
════════════════

Bound arithmetic for 64-bit signed sentinel intervals.

Every interval bound in the package is an ``int`` inside
``[I64_MIN, I64_MAX]``.  The two extremes double as sentinels for the
unbounded ends:

    I64_MIN  ≡  −∞        I64_MAX  ≡  +∞

Python integers never wrap, so "saturating" here means clamping back into
the i64 range.  Bounds and outputs computed by :mod:`almanac.interval`,
:mod:`almanac.total_function` and :mod:`almanac.query` go through these
helpers.  Shifts are plain sums and are never clamped.
"""

from __future__ import annotations

from typing import Final

I64_MIN: Final[int] = -(1 << 63)
I64_MAX: Final[int] = (1 << 63) - 1


def clamp(value: int) -> int:
    """Clamp *value* into ``[I64_MIN, I64_MAX]``."""
    if value < I64_MIN:
        return I64_MIN
    if value > I64_MAX:
        return I64_MAX
    return value


def saturating_add(a: int, b: int) -> int:
    return clamp(a + b)


def saturating_sub(a: int, b: int) -> int:
    return clamp(a - b)


def translate_lower(bound: int, delta: int) -> int:
    """
    Move a lower bound by *delta*.

    ``I64_MIN`` is −∞ and stays where it is.  Finite bounds are moved
    exactly, so the result may fall outside the i64 range; such a value is
    only ever compared against in-range bounds, never stored.

    >>> translate_lower(10, -5)
    5
    >>> translate_lower(I64_MIN, 7) == I64_MIN
    True
    """
    if bound == I64_MIN:
        return bound
    return bound + delta


def translate_upper(bound: int, delta: int) -> int:
    """Move an upper bound by *delta*; ``I64_MAX`` is +∞ and stays put."""
    if bound == I64_MAX:
        return bound
    return bound + delta


def in_range(value: int) -> bool:
    return I64_MIN <= value <= I64_MAX


def format_bound(bound: int) -> str:
    """Render a bound for humans, sentinels as ``-inf`` / ``+inf``."""
    if bound == I64_MIN:
        return "-inf"
    if bound == I64_MAX:
        return "+inf"
    return str(bound)
