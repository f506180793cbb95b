"""
almanac/total_function.py
═════════════════════════

A piecewise-linear function defined on every 64-bit integer.

    From: seed
    To:   soil
    Intervals = [
        x + shift     lower ≤ x ≤ upper
        ...
    ]

    ┌────────────┬──────────────┬────────────┬────────────┐
    │ [-inf, 49] │  [50, 97]    │  [98, 99]  │ [100,+inf] │
    │    +0      │     +2       │    -48     │    +0      │
    └────────────┴──────────────┴────────────┴────────────┘

Invariant (checked on construction): the intervals are sorted by
``lower``, pairwise disjoint and contiguous, starting at ``I64_MIN`` and
ending at ``I64_MAX``.

Two operations produce new functions:

``fill_gaps``
    Sort a partial collection of intervals and plug every uncovered
    sub-range with an identity (shift 0) filler.

``compose``
    ``A: X→Y`` then ``B: Y→Z`` gives ``A∘B: X→Z`` by intersecting every
    interval of ``A`` with every interval of ``B`` (moved into X
    coordinates) and gap-filling the survivors.
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Sequence, Tuple

from .arith import I64_MAX, I64_MIN, saturating_add, saturating_sub
from .errors import InvariantViolation
from .interval import Interval

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
#  PART 1 — GAP FILLING
# ═══════════════════════════════════════════════════════════════════════════

def fill_gaps(intervals: Iterable[Interval]) -> Tuple[Interval, ...]:
    """
    Normalise a non-empty collection of disjoint intervals so that it
    covers the whole i64 domain.

    Touching neighbours (``current.lower - previous.upper == 1``) need no
    filler.  Overlapping input is not detected here; the resulting
    sequence is rejected by :class:`TotalFunction`.
    """
    ordered = sorted(intervals, key=lambda iv: iv.lower)
    if not ordered:
        raise InvariantViolation("cannot gap-fill an empty interval collection")

    result: List[Interval] = []
    first = ordered[0]
    if first.lower != I64_MIN:
        result.append(Interval.filler(I64_MIN, saturating_sub(first.lower, 1)))
    result.append(first)

    for previous, current in zip(ordered, ordered[1:]):
        if saturating_sub(current.lower, previous.upper) > 1:
            result.append(
                Interval.filler(
                    saturating_add(previous.upper, 1),
                    saturating_sub(current.lower, 1),
                )
            )
        result.append(current)

    if ordered[-1].upper != I64_MAX:
        result.append(Interval.filler(saturating_add(result[-1].upper, 1), I64_MAX))

    return tuple(result)


def check_coverage(intervals: Sequence[Interval]) -> None:
    """Raise :class:`InvariantViolation` unless *intervals* tile the domain."""
    if not intervals:
        raise InvariantViolation("total function has no intervals")
    if intervals[0].lower != I64_MIN:
        raise InvariantViolation(f"domain starts at {intervals[0].lower}, not at -inf")
    if intervals[-1].upper != I64_MAX:
        raise InvariantViolation(f"domain ends at {intervals[-1].upper}, not at +inf")
    for previous, current in zip(intervals, intervals[1:]):
        if current.lower != previous.upper + 1:
            what = "gap" if current.lower > previous.upper + 1 else "overlap"
            raise InvariantViolation(f"{what} between {previous!r} and {current!r}")


# ═══════════════════════════════════════════════════════════════════════════
#  PART 2 — TOTAL FUNCTION
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TotalFunction:
    """
    One stage, or a composition of stages, as a total function.

    ``domain`` and ``codomain`` are labels only (e.g. ``"seed"`` and
    ``"soil"``); they take no part in any computation.

    Examples
    --------
    >>> f = TotalFunction.from_intervals("seed", "soil", [Interval(50, 97, 2)])
    >>> len(f)
    3
    >>> f(79), f(10)
    (81, 10)
    """

    domain: str
    codomain: str
    intervals: Tuple[Interval, ...]
    _lowers: Tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        intervals = tuple(self.intervals)
        check_coverage(intervals)
        object.__setattr__(self, "intervals", intervals)
        object.__setattr__(self, "_lowers", tuple(iv.lower for iv in intervals))

    # ---- Constructors ----------------------------------------------------

    @classmethod
    def from_intervals(
        cls, domain: str, codomain: str, intervals: Iterable[Interval]
    ) -> TotalFunction:
        """Gap-fill *intervals* and wrap the result."""
        return cls(domain, codomain, fill_gaps(intervals))

    @classmethod
    def identity(cls, domain: str = "x", codomain: str = "x") -> TotalFunction:
        """``f(x) = x`` everywhere."""
        return cls(domain, codomain, (Interval.filler(),))

    # ---- Queries ---------------------------------------------------------

    def interval_at(self, x: int) -> Interval:
        index = bisect.bisect_right(self._lowers, x) - 1
        if index < 0:
            raise InvariantViolation(f"no interval covers {x}")
        return self.intervals[index]

    def evaluate(self, x: int) -> int:
        return self.interval_at(x).apply(x)

    __call__ = evaluate

    def overlapping(self, lo: int, hi: int) -> Iterator[Interval]:
        """Yield the intervals sharing at least one value with ``[lo, hi]``, in order."""
        start = max(bisect.bisect_right(self._lowers, lo) - 1, 0)
        for iv in self.intervals[start:]:
            if iv.lower > hi:
                break
            if iv.overlaps(lo, hi):
                yield iv

    # ---- Composition -----------------------------------------------------

    def compose(self, other: TotalFunction) -> TotalFunction:
        """``self`` then ``other``; see :func:`compose`."""
        return compose(self, other)

    # ---- Dunder ----------------------------------------------------------

    def __len__(self) -> int:
        return len(self.intervals)

    def __iter__(self) -> Iterator[Interval]:
        return iter(self.intervals)

    def __repr__(self) -> str:
        return f"TotalFunction({self.domain}→{self.codomain}, {len(self)} intervals)"


def compose(first: TotalFunction, second: TotalFunction) -> TotalFunction:
    """
    Build ``first∘second``: ``x ↦ second(first(x))``.

    Quadratic in the interval counts; most candidate pairs are discarded
    by the overlap test in :meth:`Interval.merge`.  Because both inputs
    are total, the surviving pieces already tile the domain of ``first``;
    gap filling only restores the sort order.
    """
    pieces: List[Interval] = []
    for a in first.intervals:
        for b in second.intervals:
            merged = a.merge(b)
            if merged is not None:
                pieces.append(merged)

    result = TotalFunction.from_intervals(first.domain, second.codomain, pieces)
    logger.debug(
        "composed %s (%d) with %s (%d): %d intervals",
        f"{first.domain}→{first.codomain}", len(first),
        f"{second.domain}→{second.codomain}", len(second),
        len(result),
    )
    return result
