"""
almanac/interval.py
═══════════════════

The atomic rule of a stage:

    f(x) = x + shift        lower ≤ x ≤ upper

Bounds are inclusive; ``I64_MIN`` / ``I64_MAX`` stand for the unbounded
ends (see :mod:`almanac.arith`).  Bounds always lie in the i64 range; the
shift of a composed piece is an exact sum and may not.

Examples
--------
>>> a = Interval(0, 9, 5)
>>> b = Interval(10, 19, -3)
>>> a.merge(b)
Interval([5, 9] +2)
>>> a.apply(4)
9
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .arith import (
    I64_MAX,
    I64_MIN,
    format_bound,
    in_range,
    saturating_add,
    translate_lower,
    translate_upper,
)
from .errors import InvariantViolation


@dataclass(frozen=True, slots=True)
class Interval:
    """Closed range ``[lower, upper]`` mapped through a constant ``shift``."""

    lower: int
    upper: int
    shift: int = 0

    def __post_init__(self) -> None:
        if not (in_range(self.lower) and in_range(self.upper)):
            raise InvariantViolation(
                f"interval bounds outside 64-bit range: [{self.lower}, {self.upper}]"
            )
        if self.lower > self.upper:
            raise InvariantViolation(
                f"empty interval: lower {self.lower} > upper {self.upper}"
            )

    # ---- Constructors ----------------------------------------------------

    @classmethod
    def filler(cls, lower: int = I64_MIN, upper: int = I64_MAX) -> Interval:
        """Identity piece (shift 0) used to plug gaps."""
        return cls(lower, upper, 0)

    @classmethod
    def from_rule(cls, destination: int, source: int, length: int) -> Optional[Interval]:
        """
        Translate a raw ``(destination, source, length)`` triple.

        The rule covers ``source .. source + length - 1``.  A zero-length
        rule covers nothing and yields ``None``.  A rule reaching past the
        i64 range is rejected by the constructor.
        """
        if length <= 0:
            return None
        return cls(source, source + length - 1, destination - source)

    # ---- Predicates ------------------------------------------------------

    def contains(self, x: int) -> bool:
        return self.lower <= x <= self.upper

    def overlaps(self, lo: int, hi: int) -> bool:
        """Does ``[lo, hi]`` share at least one value with this interval?"""
        return self.upper >= lo and self.lower <= hi

    def width(self) -> int:
        """Number of integers covered."""
        return self.upper - self.lower + 1

    # ---- Evaluation & composition -----------------------------------------

    def apply(self, x: int) -> int:
        """``x + shift``, saturating at the i64 limits."""
        return saturating_add(x, self.shift)

    def merge(self, other: Interval) -> Optional[Interval]:
        """
        Compose ``self`` (X→Y) with ``other`` (Y→Z).

        ``other``'s bounds are expressed in Y; they are moved back into X
        by ``-self.shift`` and intersected with ``self``.  The result maps
        the intersection through the exact sum ``self.shift + other.shift``,
        i.e. ``other(self(x))``.  Returns ``None`` when the two pieces share no
        input value.
        """
        lower_x = translate_lower(other.lower, -self.shift)
        upper_x = translate_upper(other.upper, -self.shift)

        if self.upper < lower_x or upper_x < self.lower:
            return None

        return Interval(
            max(self.lower, lower_x),
            min(self.upper, upper_x),
            self.shift + other.shift,
        )

    def __repr__(self) -> str:
        return (
            f"Interval([{format_bound(self.lower)}, {format_bound(self.upper)}] "
            f"{self.shift:+d})"
        )
