# tests/test_query.py
"""
Tests for seed ranges and the range-minimum query.
"""

from types import SimpleNamespace

import pytest

from almanac.arith import I64_MAX
from almanac.errors import ErrorCode, InvariantViolation, StructuralError
from almanac.interval import Interval
from almanac.pipeline import seed_to_location
from almanac.query import (
    SeedRange,
    min_location,
    min_location_of_seeds,
    min_output,
    pair_seed_ranges,
)
from almanac.total_function import TotalFunction
from tests.conftest import EXAMPLE_MIN_RANGE_LOCATION, EXAMPLE_MIN_SEED_LOCATION


@pytest.fixture
def three_pieces():
    return TotalFunction.from_intervals("seed", "soil", [
        Interval(0, 49, 0),
        Interval(50, 97, 2),
        Interval(98, I64_MAX, -48),
    ])


class TestSeedRange:

    def test_from_start_length(self):
        assert SeedRange.from_start_length(79, 14) == SeedRange(79, 92)

    def test_single_seed(self):
        rng = SeedRange.from_start_length(5, 1)
        assert (rng.lo, rng.hi, rng.size()) == (5, 5, 1)

    def test_zero_length_rejected(self):
        with pytest.raises(StructuralError) as info:
            SeedRange.from_start_length(5, 0)
        assert info.value.code is ErrorCode.EMPTY_SEED_RANGE

    def test_inverted_bounds_rejected(self):
        with pytest.raises(StructuralError):
            SeedRange(10, 9)

    def test_end_saturates(self):
        assert SeedRange.from_start_length(I64_MAX - 1, 10).hi == I64_MAX

    def test_pairing(self):
        assert pair_seed_ranges([79, 14, 55, 13]) == [SeedRange(79, 92), SeedRange(55, 67)]

    def test_odd_seed_count(self):
        with pytest.raises(StructuralError) as info:
            pair_seed_ranges([79, 14, 55])
        assert info.value.code is ErrorCode.ODD_SEED_COUNT

    def test_no_seeds(self):
        with pytest.raises(StructuralError):
            pair_seed_ranges([])


class TestMinOutput:

    def test_single_overlapping_interval(self, three_pieces):
        assert min_output(SeedRange(79, 92), three_pieces) == 81

    def test_left_edge_of_each_overlap(self, three_pieces):
        # [40, 49] -> 40; [50, 97] -> 52; [98, 120] -> 50
        assert min_output(SeedRange(40, 120), three_pieces) == 40
        assert min_output(SeedRange(45, 120), three_pieces) == 45
        assert min_output(SeedRange(60, 120), three_pieces) == 50

    def test_range_below_first_rule_hits_filler(self, three_pieces):
        assert min_output(SeedRange(-10, -1), three_pieces) == -10

    def test_matches_exhaustive_minimum(self, example_almanac):
        function = seed_to_location(example_almanac)
        for lo, hi in [(79, 92), (55, 67), (0, 120), (46, 46), (90, 100)]:
            expected = min(function(x) for x in range(lo, hi + 1))
            assert min_output(SeedRange(lo, hi), function) == expected

    def test_no_overlap_is_an_invariant_violation(self):
        broken = SimpleNamespace(overlapping=lambda lo, hi: iter(()))
        with pytest.raises(InvariantViolation):
            min_output(SeedRange(0, 10), broken)


class TestMinLocation:

    def test_example_ranges(self, example_almanac):
        function = seed_to_location(example_almanac)
        ranges = pair_seed_ranges(example_almanac.seeds)
        assert min_location(ranges, function) == EXAMPLE_MIN_RANGE_LOCATION

    def test_example_seeds(self, example_almanac):
        function = seed_to_location(example_almanac)
        assert min_location_of_seeds(example_almanac.seeds, function) == EXAMPLE_MIN_SEED_LOCATION

    def test_huge_range_is_not_enumerated(self, three_pieces):
        rng = SeedRange.from_start_length(0, 4_000_000_000_000)
        assert min_location([rng], three_pieces) == 0

    def test_empty_inputs(self, three_pieces):
        with pytest.raises(StructuralError):
            min_location([], three_pieces)
        with pytest.raises(StructuralError):
            min_location_of_seeds([], three_pieces)
