"""
almanac/bruteforce.py
═════════════════════

The naive path: push every value through the raw rules of each stage in
turn.  A value covered by rule ``(d, s, n)`` (``s ≤ v < s + n``) becomes
``d + (v - s)``; a value no rule covers passes through unchanged.

Cost is linear in the number of seeds, which makes range mode unusable
for real inputs; :func:`min_location_bruteforce` refuses to enumerate more
than ``max_values`` seeds.  It exists to cross-check the composed
function on small inputs and for per-seed answers.
"""

from __future__ import annotations

import logging
from typing import Final, Iterable, Optional, Sequence

from .arith import saturating_add
from .errors import ErrorCode, StructuralError
from .parser import Almanac, Rule
from .query import SeedRange

logger = logging.getLogger(__name__)

DEFAULT_MAX_VALUES: Final[int] = 10_000_000


def map_value(value: int, rules: Sequence[Rule]) -> int:
    """Apply one stage's rules to a single value."""
    for rule in rules:
        if rule.source <= value < rule.source + rule.length:
            return saturating_add(rule.destination, value - rule.source)
    return value


def locate(seed: int, almanac: Almanac) -> int:
    """Location of *seed* after all seven stages."""
    value = seed
    for rules in almanac.stages:
        value = map_value(value, rules)
    return value


def min_location_bruteforce(
    almanac: Almanac,
    ranges: Optional[Iterable[SeedRange]] = None,
    *,
    max_values: int = DEFAULT_MAX_VALUES,
) -> int:
    """
    Minimum location by enumeration.

    With *ranges* ``None`` the seeds are taken individually; otherwise
    every seed of every range is visited.
    """
    if ranges is None:
        seeds: Iterable[int] = almanac.seeds
        total = len(almanac.seeds)
    else:
        ranges = list(ranges)
        total = sum(rng.size() for rng in ranges)
        seeds = (seed for rng in ranges for seed in range(rng.lo, rng.hi + 1))

    if total > max_values:
        raise StructuralError(
            f"brute force would evaluate {total} seeds (limit {max_values})",
            code=ErrorCode.TOO_MANY_VALUES,
        )
    if total == 0:
        raise StructuralError("no seeds given", code=ErrorCode.NO_SEEDS)

    logger.info("brute force over %d seeds", total)
    return min(locate(seed, almanac) for seed in seeds)
