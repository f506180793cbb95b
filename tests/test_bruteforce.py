# tests/test_bruteforce.py
"""
Tests for the value-by-value evaluation path.
"""

import pytest

from almanac.arith import I64_MAX, I64_MIN
from almanac.bruteforce import locate, map_value, min_location_bruteforce
from almanac.errors import ErrorCode, StructuralError
from almanac.parser import Rule, parse_almanac
from almanac.pipeline import STAGE_NAMES, seed_to_location
from almanac.query import SeedRange, min_location_of_seeds, pair_seed_ranges
from tests.conftest import (
    EXAMPLE_MIN_RANGE_LOCATION,
    EXAMPLE_MIN_SEED_LOCATION,
    EXAMPLE_SEED_LOCATIONS,
)

RULES = [Rule(50, 98, 2), Rule(52, 50, 48)]


class TestMapValue:

    @pytest.mark.parametrize("value, expected", [
        (0, 0),
        (49, 49),
        (50, 52),
        (79, 81),
        (97, 99),
        (98, 50),
        (99, 51),
        (100, 100),
    ])
    def test_seed_to_soil(self, value, expected):
        assert map_value(value, RULES) == expected

    def test_no_rules_is_identity(self):
        assert map_value(7, []) == 7


class TestLocate:

    def test_example_seeds(self, example_almanac):
        for seed, location in EXAMPLE_SEED_LOCATIONS.items():
            assert locate(seed, example_almanac) == location


class TestMinLocationBruteforce:

    def test_individual_seeds(self, example_almanac):
        assert min_location_bruteforce(example_almanac) == EXAMPLE_MIN_SEED_LOCATION

    def test_seed_ranges(self, example_almanac):
        ranges = pair_seed_ranges(example_almanac.seeds)
        assert min_location_bruteforce(example_almanac, ranges) == EXAMPLE_MIN_RANGE_LOCATION

    def test_limit(self, example_almanac):
        ranges = pair_seed_ranges(example_almanac.seeds)
        with pytest.raises(StructuralError) as info:
            min_location_bruteforce(example_almanac, ranges, max_values=20)
        assert info.value.code is ErrorCode.TOO_MANY_VALUES

    def test_limit_counts_without_enumerating(self, example_almanac):
        huge = [SeedRange.from_start_length(0, 10 ** 15)]
        with pytest.raises(StructuralError):
            min_location_bruteforce(example_almanac, huge)

    def test_no_ranges(self, example_almanac):
        with pytest.raises(StructuralError):
            min_location_bruteforce(example_almanac, [])


def _edge_almanac(seeds, first, second):
    parts = [f"seeds: {seeds}", ""]
    for name, rule in zip(STAGE_NAMES, [first, second] + ["5 5 1"] * 5):
        parts += [f"{name} map:", rule, ""]
    return parse_almanac("\n".join(parts))


class TestAgreesWithComposed:

    @pytest.mark.parametrize("seeds, first, second, lowest", [
        # 0 -> -10 -> I64_MAX - 10
        ("0 3", "-10 0 1", "9223372036854775797 -10 1", 3),
        # I64_MAX -> -1 -> I64_MIN; the summed shift lies below i64
        ("0 9223372036854775807", "-1 9223372036854775807 1",
         "-9223372036854775808 -1 1", I64_MIN),
    ])
    def test_shifts_at_i64_edge(self, seeds, first, second, lowest):
        almanac = _edge_almanac(seeds, first, second)
        function = seed_to_location(almanac)
        for seed in almanac.seeds:
            assert function(seed) == locate(seed, almanac), seed
        assert min_location_of_seeds(almanac.seeds, function) == lowest
        assert min_location_bruteforce(almanac) == lowest

    def test_reached_edge_value(self):
        almanac = _edge_almanac("0 3", "-10 0 1", "9223372036854775797 -10 1")
        assert locate(0, almanac) == seed_to_location(almanac)(0) == I64_MAX - 10

    def test_example_seed_ranges(self, example_almanac):
        function = seed_to_location(example_almanac)
        for rng in pair_seed_ranges(example_almanac.seeds):
            for seed in range(rng.lo, rng.hi + 1):
                assert function(seed) == locate(seed, example_almanac), seed
