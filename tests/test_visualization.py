"""
Tests for the acacia tree visualization mapper.
"""

import pytest
from datetime import date

from acacia_bloom.analytics.visualization import (
    generate_acacia_visualization,
    seasonal_pattern_label,
    tree_state_for,
)
from acacia_bloom.domain.models import TreeState
from acacia_bloom.forecast import generate_daily_predictions


def _predictions(multiplier, days=10):
    return generate_daily_predictions(
        baseline_trend=0.0, seasonal=multiplier, weather=1.0, events=1.0, economic=1.0,
        forecast_days=days, start_date=date(2026, 1, 1),
    )


class TestTreeState:
    @pytest.mark.parametrize("intensity, state", [
        (0.0, TreeState.SEEDLING),
        (0.49, TreeState.SEEDLING),
        (0.5, TreeState.GROWING),
        (0.79, TreeState.GROWING),
        (0.8, TreeState.BLOOMING),
        (1.0, TreeState.BLOOMING),
        (1.2, TreeState.MATURE),
        (1.79, TreeState.MATURE),
        (1.8, TreeState.ABUNDANT),
        (5.0, TreeState.ABUNDANT),
    ])
    def test_thresholds(self, intensity, state):
        assert tree_state_for(intensity) == state


class TestSeasonalPatternLabel:
    def test_rising(self):
        assert seasonal_pattern_label([1.0, 1.2]) == "Spring Growth"

    def test_flat_or_falling(self):
        assert seasonal_pattern_label([1.0, 1.0]) == "Autumn Preparation"
        assert seasonal_pattern_label([1.2, 1.0]) == "Autumn Preparation"


class TestGenerateAcaciaVisualization:
    def test_neutral_demand(self):
        viz = generate_acacia_visualization(_predictions(1.0), [1.0] * 10)

        assert viz.tree_state == TreeState.BLOOMING
        assert viz.leaf_count == 50
        assert viz.bloom_intensity == 0
        assert viz.seasonal_pattern == "Autumn Preparation"

    def test_high_demand_caps_leaves(self):
        viz = generate_acacia_visualization(_predictions(2.5), [2.5] * 10)

        assert viz.tree_state == TreeState.ABUNDANT
        assert viz.leaf_count == 100

    def test_bloom_from_seasonal_spread(self):
        seasonal = [0.9] * 5 + [1.54] * 5
        viz = generate_acacia_visualization(_predictions(1.0), seasonal)

        assert viz.bloom_intensity == 64
        assert viz.seasonal_pattern == "Spring Growth"

    def test_half_up_rounding(self):
        # intensity 0.25 → 12.5 leaves → 13
        viz = generate_acacia_visualization(_predictions(0.25), [0.25] * 10)
        assert viz.leaf_count == 13
        assert viz.tree_state == TreeState.SEEDLING

    def test_normalized_by_base_demand(self):
        viz = generate_acacia_visualization(_predictions(1.0), [1.0] * 10, base_demand=50.0)

        assert viz.tree_state == TreeState.ABUNDANT
        assert viz.leaf_count == 100
