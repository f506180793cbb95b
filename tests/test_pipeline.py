# tests/test_pipeline.py
"""
Tests for stage construction and the seed→location fold.
"""

import logging

import pytest

from almanac.bruteforce import locate
from almanac.errors import OverlappingRulesError, StructuralError
from almanac.interval import Interval
from almanac.parser import Rule
from almanac.pipeline import (
    STAGE_NAMES,
    STAGES,
    build_stage_function,
    compose_pipeline,
    seed_to_location,
)
from almanac.total_function import TotalFunction
from tests.conftest import EXAMPLE_SEED_LOCATIONS


class TestStages:

    def test_seven_stages_in_order(self):
        assert STAGE_NAMES == (
            "seed-to-soil",
            "soil-to-fertilizer",
            "fertilizer-to-water",
            "water-to-light",
            "light-to-temperature",
            "temperature-to-humidity",
            "humidity-to-location",
        )

    def test_stage_metadata(self):
        assert [stage.index for stage in STAGES] == list(range(7))
        assert STAGES[0].source == "seed"
        assert STAGES[-1].target == "location"
        for previous, current in zip(STAGES, STAGES[1:]):
            assert previous.target == current.source


class TestBuildStageFunction:

    def test_example_seed_to_soil(self):
        rules = [Rule(50, 98, 2, line=4), Rule(52, 50, 48, line=5)]
        function = build_stage_function(STAGES[0], rules)
        assert (function.domain, function.codomain) == ("seed", "soil")
        assert function.intervals[1:3] == (Interval(50, 97, 2), Interval(98, 99, -48))
        assert function(79) == 81
        assert function(92) == 94

    def test_zero_length_rules_are_dropped(self):
        rules = [Rule(0, 10, 0), Rule(5, 20, 3)]
        function = build_stage_function(STAGES[0], rules)
        assert len(function) == 3

    def test_only_zero_length_rules(self):
        with pytest.raises(StructuralError):
            build_stage_function(STAGES[2], [Rule(1, 2, 0)])

    def test_overlapping_rules_rejected(self):
        rules = [Rule(0, 10, 10, line=4), Rule(100, 15, 10, line=5)]
        with pytest.raises(OverlappingRulesError) as info:
            build_stage_function(STAGES[1], rules)
        err = info.value
        assert err.stage == "soil-to-fertilizer"
        assert (err.first_line, err.second_line) == (4, 5)
        assert "[15, 19]" in str(err)

    def test_touching_rules_accepted(self):
        rules = [Rule(0, 10, 5), Rule(100, 15, 5)]
        function = build_stage_function(STAGES[1], rules)
        assert function(14) == 4
        assert function(15) == 100


class TestComposePipeline:

    def test_single_function_is_returned(self, seed_to_soil):
        assert compose_pipeline([seed_to_soil]) is seed_to_soil

    def test_empty_pipeline(self):
        with pytest.raises(StructuralError):
            compose_pipeline([])

    def test_labels(self, example_stages):
        composed = compose_pipeline(example_stages)
        assert (composed.domain, composed.codomain) == ("seed", "location")

    def test_order_matters(self, example_stages):
        forward = compose_pipeline(example_stages)
        backward = compose_pipeline(list(reversed(example_stages)))
        assert any(forward(x) != backward(x) for x in range(0, 100))

    def test_label_mismatch_is_logged(self, caplog):
        f = TotalFunction.identity("seed", "soil")
        g = TotalFunction.identity("water", "light")
        with caplog.at_level(logging.WARNING, logger="almanac"):
            compose_pipeline([f, g])
        assert "do not chain" in caplog.text


class TestSeedToLocation:

    def test_example_seeds(self, example_almanac):
        function = seed_to_location(example_almanac)
        for seed, location in EXAMPLE_SEED_LOCATIONS.items():
            assert function(seed) == location

    def test_agrees_with_stage_by_stage_evaluation(self, example_almanac):
        function = seed_to_location(example_almanac)
        for seed in range(-5, 130):
            assert function(seed) == locate(seed, example_almanac), seed

    def test_fold_equals_nested_evaluation(self, example_almanac, example_stages):
        function = seed_to_location(example_almanac)
        for seed in (0, 13, 14, 55, 79, 98, 99, 100):
            value = seed
            for stage in example_stages:
                value = stage(value)
            assert function(seed) == value
