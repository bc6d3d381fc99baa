"""
Tests for statistical profiles.
"""

import json

import pytest

from salaryqa.pipelines.anomaly.profile import build_profile


class TestBuildProfile:
    """Test summary statistics."""

    def test_odd_count(self):
        profile = build_profile([5000, 1000, 3000, 2000, 4000])

        assert profile.count == 5
        assert profile.mean == 3000
        assert profile.median == 3000
        assert profile.min == 1000
        assert profile.max == 5000
        assert profile.std == pytest.approx(1414.2136, rel=1e-6)

    def test_even_count_median(self):
        profile = build_profile([1000, 2000, 3000, 4000])

        assert profile.median == 2500

    def test_nearest_rank_quartiles(self):
        """Quartiles index floor(n * 0.25) and floor(n * 0.75) without interpolation."""
        profile = build_profile([10, 20, 30, 40, 50, 60, 70, 80, 90, 100])

        # floor(2.5) = 2, floor(7.5) = 7
        assert profile.q1 == 30
        assert profile.q3 == 80
        assert profile.iqr == 50

    def test_population_std(self):
        profile = build_profile([3900] * 20 + [4500] * 20)

        assert profile.mean == 4200
        assert profile.std == pytest.approx(300)

    def test_identical_values(self):
        """A flat sample has zero spread and zero IQR."""
        profile = build_profile([4000] * 8)

        assert profile.std == 0
        assert profile.iqr == 0
        assert profile.median == 4000

    def test_input_order_irrelevant(self):
        assert build_profile([3, 1, 2, 5, 4]) == build_profile([1, 2, 3, 4, 5])

    def test_empty_sample(self):
        with pytest.raises(ValueError):
            build_profile([])

    def test_plain_python_values(self):
        """Statistics come back as builtin floats so results serialize to JSON."""
        profile = build_profile(s for s in (4000, 4200, 4400))

        assert type(profile.mean) is float
        assert type(profile.std) is float
        assert type(profile.q1) is float
        assert type(profile.count) is int
        assert json.loads(json.dumps(profile.to_dict()))["median"] == 4200
