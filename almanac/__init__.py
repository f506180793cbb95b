"""
almanac — Interval-composition solver for seed-to-location almanacs
===================================================================

Each of the seven almanac stages is a piecewise-linear map on the 64-bit
integers.  Instead of pushing every seed through every stage, the stages
are normalised into total interval functions, composed into a single
``seed→location`` function, and the minimum over each seed range is read
directly off the composed intervals.

Core modules
------------
arith
    i64 sentinels and saturating bound arithmetic.
interval
    ``Interval``: ``x + shift`` on ``[lower, upper]``, and pairwise merge.
total_function
    Gap filling, the ``TotalFunction`` invariant, composition.
pipeline
    The seven fixed stages and their left-to-right composition.
query
    Seed ranges and the range-minimum query.

Supporting modules
------------------
parser
    Parsimonious grammar for the almanac text format.
bruteforce
    Value-by-value evaluation, used as a cross-check.
errors
    Error taxonomy.
main
    ``almanac`` command-line interface.

Quick start
-----------
>>> from almanac import parse_almanac, seed_to_location, pair_seed_ranges, min_location
>>> almanac = parse_almanac(open("input.txt").read())          # doctest: +SKIP
>>> min_location(pair_seed_ranges(almanac.seeds), seed_to_location(almanac))  # doctest: +SKIP
46
"""

from __future__ import annotations

import logging
from typing import List

# ---------------------------------------------------------------------------
# Package metadata
# ---------------------------------------------------------------------------

__version__ = "0.1.0"
__license__ = "MIT"

_log = logging.getLogger(__name__)
_log.addHandler(logging.NullHandler())

from .arith import I64_MAX, I64_MIN  # noqa: E402
from .errors import (  # noqa: E402
    AlmanacError,
    ErrorCode,
    InvariantViolation,
    OverlappingRulesError,
    ParseError,
    ParseErrorKind,
    StructuralError,
)
from .interval import Interval  # noqa: E402
from .total_function import TotalFunction, compose, fill_gaps  # noqa: E402
from .pipeline import (  # noqa: E402
    STAGE_NAMES,
    STAGES,
    Stage,
    build_stage_function,
    build_stage_functions,
    compose_pipeline,
    seed_to_location,
)
from .query import (  # noqa: E402
    SeedRange,
    min_location,
    min_location_of_seeds,
    min_output,
    pair_seed_ranges,
)
from .parser import Almanac, Rule, load_almanac, parse_almanac  # noqa: E402

__all__: List[str] = [
    "I64_MAX",
    "I64_MIN",
    "AlmanacError",
    "ErrorCode",
    "InvariantViolation",
    "OverlappingRulesError",
    "ParseError",
    "ParseErrorKind",
    "StructuralError",
    "Interval",
    "TotalFunction",
    "compose",
    "fill_gaps",
    "STAGE_NAMES",
    "STAGES",
    "Stage",
    "build_stage_function",
    "build_stage_functions",
    "compose_pipeline",
    "seed_to_location",
    "SeedRange",
    "min_location",
    "min_location_of_seeds",
    "min_output",
    "pair_seed_ranges",
    "Almanac",
    "Rule",
    "load_almanac",
    "parse_almanac",
]
