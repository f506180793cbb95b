"""
almanac/query.py
════════════════

Minimum output of a :class:`~almanac.total_function.TotalFunction` over
an input range.

Each interval maps its inputs through a constant shift, so within one
interval the output grows with the input.  The minimum over
``[lo, hi] ∩ interval`` is therefore reached at the left edge of the
overlap; one evaluation per overlapping interval is enough.

Ranges are independent of each other and only read the function.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .arith import clamp, saturating_add
from .errors import ErrorCode, InvariantViolation, StructuralError
from .total_function import TotalFunction


@dataclass(frozen=True, slots=True)
class SeedRange:
    """Inclusive span ``[lo, hi]`` of seed values."""

    lo: int
    hi: int

    def __post_init__(self) -> None:
        if self.lo > self.hi:
            raise StructuralError(
                f"empty seed range [{self.lo}, {self.hi}]",
                code=ErrorCode.EMPTY_SEED_RANGE,
            )

    @classmethod
    def from_start_length(cls, start: int, length: int) -> SeedRange:
        if length <= 0:
            raise StructuralError(
                f"seed range starting at {start} has length {length}",
                code=ErrorCode.EMPTY_SEED_RANGE,
            )
        return cls(clamp(start), clamp(start + length - 1))

    def size(self) -> int:
        """Number of seeds; may exceed ``sys.maxsize``, so not ``__len__``."""
        return self.hi - self.lo + 1


def pair_seed_ranges(seeds: Sequence[int]) -> List[SeedRange]:
    """Read consecutive ``(start, length)`` pairs from the seed list."""
    if not seeds:
        raise StructuralError("no seeds given", code=ErrorCode.NO_SEEDS)
    if len(seeds) % 2:
        raise StructuralError(
            f"seed list has odd length {len(seeds)}; expected (start, length) pairs",
            code=ErrorCode.ODD_SEED_COUNT,
        )
    return [
        SeedRange.from_start_length(start, length)
        for start, length in zip(seeds[::2], seeds[1::2])
    ]


def min_output(rng: SeedRange, function: TotalFunction) -> int:
    """Smallest ``function(x)`` for ``rng.lo ≤ x ≤ rng.hi``."""
    candidates = [
        saturating_add(max(iv.lower, rng.lo), iv.shift)
        for iv in function.overlapping(rng.lo, rng.hi)
    ]
    if not candidates:
        raise InvariantViolation(
            f"no interval of {function!r} overlaps [{rng.lo}, {rng.hi}]"
        )
    return min(candidates)


def min_location(ranges: Iterable[SeedRange], function: TotalFunction) -> int:
    """Global minimum of :func:`min_output` across *ranges*."""
    results = [min_output(rng, function) for rng in ranges]
    if not results:
        raise StructuralError("no seed ranges given", code=ErrorCode.NO_SEEDS)
    return min(results)


def min_location_of_seeds(seeds: Iterable[int], function: TotalFunction) -> int:
    """Minimum of ``function(seed)`` over individual seed values."""
    results = [function(seed) for seed in seeds]
    if not results:
        raise StructuralError("no seeds given", code=ErrorCode.NO_SEEDS)
    return min(results)
