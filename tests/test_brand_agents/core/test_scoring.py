"""
Unit tests for brand_agents.core.scoring module.
"""

import math

import pytest

from brand_agents.core.exceptions import AgentConfigError
from brand_agents.core.scoring import clamp, clamp_score, round_half_up, weighted_score


class TestRoundHalfUp:

    @pytest.mark.parametrize(
        "value,expected",
        [(2.5, 3), (3.5, 4), (2.49, 2), (0.5, 1), (99.5, 100), (0, 0)],
    )
    def test_ties_go_up(self, value, expected):
        assert round_half_up(value) == expected


class TestClamp:

    def test_clamp_bounds(self):
        assert clamp(-5) == 0
        assert clamp(150) == 100
        assert clamp(42) == 42

    def test_clamp_score_rounds_and_bounds(self):
        assert clamp_score(84.5) == 85
        assert clamp_score(120) == 100
        assert clamp_score(-3) == 0

    def test_clamp_score_non_finite(self):
        assert clamp_score(math.nan) == 0
        assert clamp_score(math.inf) == 0
        assert clamp_score("not a number") == 0


class TestWeightedScore:

    def test_weighted_average(self):
        # 0.5*80 + 0.5*61 = 70.5 -> 71
        assert weighted_score([(0.5, 80), (0.5, 61)]) == 71

    def test_weights_need_not_sum_to_one(self):
        assert weighted_score([(2, 90), (2, 70)]) == 80

    def test_zero_weights_raise(self):
        with pytest.raises(AgentConfigError):
            weighted_score([(0, 90), (0, 70)])
