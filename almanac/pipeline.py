"""
almanac/pipeline.py
═══════════════════

The seven fixed stages and their composition into one function.

    f(seed)        = soil
    f(soil)        = fertilizer
    f(fertilizer)  = water
    f(water)       = light
    f(light)       = temperature
    f(temperature) = humidity
    f(humidity)    = location

Folding :func:`~almanac.total_function.compose` left to right over the
stage functions yields a single ``seed→location`` function.  Composition
is not commutative, so the fold follows :data:`STAGES` exactly.
"""

from __future__ import annotations

import logging
from functools import reduce
from typing import TYPE_CHECKING, Final, List, NamedTuple, Sequence, Tuple

from .errors import OverlappingRulesError, StructuralError
from .interval import Interval
from .total_function import TotalFunction

if TYPE_CHECKING:
    from .parser import Almanac, Rule

logger = logging.getLogger(__name__)


class Stage(NamedTuple):
    """Position and labels of one stage; names are for diagnostics only."""

    index: int
    source: str
    target: str

    @property
    def name(self) -> str:
        return f"{self.source}-to-{self.target}"


_CATEGORIES: Final[Tuple[str, ...]] = (
    "seed", "soil", "fertilizer", "water",
    "light", "temperature", "humidity", "location",
)

STAGES: Final[Tuple[Stage, ...]] = tuple(
    Stage(i, src, dst) for i, (src, dst) in enumerate(zip(_CATEGORIES, _CATEGORIES[1:]))
)

STAGE_NAMES: Final[Tuple[str, ...]] = tuple(stage.name for stage in STAGES)


# ═══════════════════════════════════════════════════════════════════════════
#  Rules → stage function
# ═══════════════════════════════════════════════════════════════════════════

def rule_intervals(stage: Stage, rules: Sequence[Rule]) -> List[Tuple[Interval, Rule]]:
    """Translate raw rules to intervals, dropping zero-length rules."""
    pairs: List[Tuple[Interval, Rule]] = []
    for rule in rules:
        interval = Interval.from_rule(rule.destination, rule.source, rule.length)
        if interval is None:
            logger.debug("%s: dropping zero-length rule on line %s", stage.name, rule.line)
            continue
        pairs.append((interval, rule))
    return pairs


def check_disjoint(stage: Stage, pairs: Sequence[Tuple[Interval, Rule]]) -> None:
    """Raise :class:`OverlappingRulesError` if two rules of *stage* overlap."""
    ordered = sorted(pairs, key=lambda pair: pair[0].lower)
    for (prev_iv, prev_rule), (cur_iv, cur_rule) in zip(ordered, ordered[1:]):
        if cur_iv.lower <= prev_iv.upper:
            first, second = sorted(
                (prev_rule, cur_rule), key=lambda r: (r.line is None, r.line or 0)
            )
            raise OverlappingRulesError(
                stage.name,
                first.line,
                second.line,
                f"{stage.name}: rule {second.as_text()!r} overlaps rule "
                f"{first.as_text()!r} (line {first.line}) on "
                f"[{cur_iv.lower}, {min(prev_iv.upper, cur_iv.upper)}]",
            )


def build_stage_function(stage: Stage, rules: Sequence[Rule]) -> TotalFunction:
    """Normalise the rules of one stage into a total function."""
    pairs = rule_intervals(stage, rules)
    if not pairs:
        raise StructuralError(f"stage {stage.name} has no non-empty rules")
    check_disjoint(stage, pairs)
    function = TotalFunction.from_intervals(
        stage.source, stage.target, (iv for iv, _ in pairs)
    )
    logger.debug("%s: %d rules → %d intervals", stage.name, len(rules), len(function))
    return function


def build_stage_functions(almanac: Almanac) -> Tuple[TotalFunction, ...]:
    return tuple(
        build_stage_function(stage, rules)
        for stage, rules in zip(STAGES, almanac.stages)
    )


# ═══════════════════════════════════════════════════════════════════════════
#  Composition
# ═══════════════════════════════════════════════════════════════════════════

def _compose_step(acc: TotalFunction, nxt: TotalFunction) -> TotalFunction:
    if acc.codomain != nxt.domain:
        logger.warning(
            "composing %s→%s with %s→%s: labels do not chain",
            acc.domain, acc.codomain, nxt.domain, nxt.codomain,
        )
    return acc.compose(nxt)


def compose_pipeline(functions: Sequence[TotalFunction]) -> TotalFunction:
    """Left fold of composition over *functions*, in the given order."""
    if not functions:
        raise StructuralError("cannot compose an empty pipeline")
    result = reduce(_compose_step, functions[1:], functions[0])
    logger.info(
        "composed %d stages into %s→%s with %d intervals",
        len(functions), result.domain, result.codomain, len(result),
    )
    return result


def seed_to_location(almanac: Almanac) -> TotalFunction:
    """Build all seven stage functions and compose them."""
    return compose_pipeline(build_stage_functions(almanac))
