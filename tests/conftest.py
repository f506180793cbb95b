# tests/conftest.py
"""
Shared almanac texts and fixtures.

``EXAMPLE_ALMANAC`` is the small worked example: 35 is the lowest
location for the individual seeds, 46 for the seed ranges.
"""

import pytest

from almanac.interval import Interval
from almanac.parser import parse_almanac
from almanac.pipeline import build_stage_functions
from almanac.total_function import TotalFunction


EXAMPLE_ALMANAC = """\
seeds: 79 14 55 13

seed-to-soil map:
50 98 2
52 50 48

soil-to-fertilizer map:
0 15 37
37 52 2
39 0 15

fertilizer-to-water map:
49 53 8
0 11 42
42 0 7
57 7 4

water-to-light map:
88 18 7
18 25 70

light-to-temperature map:
45 77 23
81 45 19
68 64 13

temperature-to-humidity map:
0 69 1
1 0 69

humidity-to-location map:
60 56 37
56 93 4
"""

EXAMPLE_SEED_LOCATIONS = {79: 82, 14: 43, 55: 86, 13: 35}
EXAMPLE_MIN_SEED_LOCATION = 35
EXAMPLE_MIN_RANGE_LOCATION = 46

# seed-to-soil of the example, as intervals
SEED_TO_SOIL = [Interval(98, 99, -48), Interval(50, 97, 2)]


def sample_points(*functions):
    """Interval edges (and their neighbours) of every function, plus a few interior values."""
    points = {0, 1, 42, 79, 92, 1000}
    for function in functions:
        for iv in function:
            for edge in (iv.lower, iv.upper):
                points.update({edge - 1, edge, edge + 1})
    lo, hi = functions[0].intervals[0].lower, functions[0].intervals[-1].upper
    return sorted(p for p in points if lo <= p <= hi)


@pytest.fixture
def example_almanac():
    return parse_almanac(EXAMPLE_ALMANAC)


@pytest.fixture
def example_stages(example_almanac):
    return build_stage_functions(example_almanac)


@pytest.fixture
def seed_to_soil():
    return TotalFunction.from_intervals("seed", "soil", SEED_TO_SOIL)


@pytest.fixture
def almanac_file(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text(EXAMPLE_ALMANAC, encoding="utf-8")
    return path
