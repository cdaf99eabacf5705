"""
Tests for historical sales analysis (acacia_bloom/domain/history.py).

Validates:
1. Sorting and moving averages
2. Trend detection thresholds (±10%) and zero-start guard
3. Volatility (coefficient of variation)
4. Day-of-week factors and weekly seasonality labels
5. Baseline trend from split halves
"""

import pytest
from datetime import date, timedelta

from acacia_bloom.domain.history import (
    analyze_historical_patterns,
    calculate_baseline_trend,
    calculate_dow_factors,
    calculate_moving_averages,
    coefficient_of_variation,
    detect_trend,
    identify_weekly_seasonality,
    sort_sales,
)
from acacia_bloom.domain.models import SalesRecord


def _series(quantities, start=date(2026, 1, 5)):
    """Consecutive daily records starting on a Monday."""
    return [SalesRecord(date=start + timedelta(days=i), quantity=q) for i, q in enumerate(quantities)]


class TestSortAndMovingAverages:
    def test_sort_is_non_mutating(self):
        records = list(reversed(_series([1, 2, 3])))
        original = list(records)

        sorted_records = sort_sales(records)

        assert [r.quantity for r in sorted_records] == [1, 2, 3]
        assert records == original

    def test_moving_average_window(self):
        averages = calculate_moving_averages([7] * 7 + [14] * 7)

        assert len(averages) == 8
        assert averages[0] == pytest.approx(7.0)
        assert averages[-1] == pytest.approx(14.0)

    def test_moving_average_short_series_is_empty(self):
        assert calculate_moving_averages([1, 2, 3]) == []


class TestDetectTrend:
    def test_increasing(self):
        assert detect_trend([10.0, 11.5]) == "increasing"

    def test_decreasing(self):
        assert detect_trend([10.0, 8.5]) == "decreasing"

    def test_within_threshold_is_stable(self):
        assert detect_trend([10.0, 10.9]) == "stable"
        assert detect_trend([10.0, 9.1]) == "stable"

    def test_zero_start_does_not_divide(self):
        assert detect_trend([0.0, 5.0]) == "increasing"
        assert detect_trend([0.0, 0.0]) == "stable"

    def test_single_value_is_stable(self):
        assert detect_trend([3.0]) == "stable"


class TestCoefficientOfVariation:
    def test_constant_series_has_zero_cv(self):
        assert coefficient_of_variation([5, 5, 5, 5]) == 0.0

    def test_population_std(self):
        # mean 5, population std 3 → CV 0.6
        assert coefficient_of_variation([2, 8]) == pytest.approx(0.6)

    def test_empty_and_zero_mean(self):
        assert coefficient_of_variation([]) == 0.0
        assert coefficient_of_variation([0, 0, 0]) == 0.0


class TestDayOfWeekFactors:
    def test_flat_history_is_neutral(self):
        records = _series([10] * 14)
        factors = calculate_dow_factors([r.date for r in records], [r.quantity for r in records])

        assert factors == pytest.approx([1.0] * 7)

    def test_factors_average_to_one(self):
        # Mondays sell 30, other days 10
        quantities = [30 if i % 7 == 0 else 10 for i in range(28)]
        records = _series(quantities)
        factors = calculate_dow_factors([r.date for r in records], quantities)

        assert sum(factors) / 7 == pytest.approx(1.0)
        assert factors[0] > factors[1]

    def test_zero_sales_is_neutral(self):
        records = _series([0] * 14)
        assert calculate_dow_factors([r.date for r in records], [0] * 14) == [1.0] * 7

    def test_weekly_label_needs_two_weeks(self):
        assert identify_weekly_seasonality([2.0, 1, 1, 1, 1, 1, 0.5], 10) == "undetermined"
        assert identify_weekly_seasonality([2.0, 1, 1, 1, 1, 1, 0.5], 14) == "weekly"
        assert identify_weekly_seasonality([1.0] * 7, 14) == "none"


class TestAnalyzeHistoricalPatterns:
    def test_insufficient_history(self):
        patterns = analyze_historical_patterns(_series([5, 6, 7]))

        assert patterns.has_data is False
        assert patterns.trend == "insufficient_data"
        assert patterns.n_samples == 3

    def test_empty_history(self):
        patterns = analyze_historical_patterns([])

        assert patterns.has_data is False
        assert patterns.n_samples == 0

    def test_increasing_history(self):
        patterns = analyze_historical_patterns(_series(list(range(10, 24))))

        assert patterns.has_data is True
        assert patterns.trend == "increasing"
        assert patterns.average_daily_demand == pytest.approx(16.5)
        assert len(patterns.moving_averages) == 8

    def test_seven_records_weekly_undetermined(self):
        patterns = analyze_historical_patterns(_series([10] * 7))

        assert patterns.has_data is True
        assert patterns.trend == "stable"
        assert patterns.seasonality == "undetermined"
        assert patterns.volatility == 0.0

    def test_unsorted_input_gives_same_result(self):
        records = _series(list(range(10, 24)))
        shuffled = records[7:] + records[:7]

        assert analyze_historical_patterns(shuffled) == analyze_historical_patterns(records)

    def test_strong_weekly_pattern_detected(self):
        quantities = [40 if i % 7 in (5, 6) else 10 for i in range(28)]
        patterns = analyze_historical_patterns(_series(quantities))

        assert patterns.seasonality == "weekly"


class TestBaselineTrend:
    def test_growth_between_halves(self):
        # first half avg 10, second half avg 15 → +0.5
        assert calculate_baseline_trend(_series([10] * 5 + [15] * 5)) == pytest.approx(0.5)

    def test_odd_length_split(self):
        # mid = 3: [10, 10, 10] vs [20, 20, 20, 20]
        assert calculate_baseline_trend(_series([10, 10, 10, 20, 20, 20, 20])) == pytest.approx(1.0)

    def test_too_short_history(self):
        assert calculate_baseline_trend([]) == 0.0
        assert calculate_baseline_trend(_series([5])) == 0.0

    def test_zero_first_half_returns_zero(self):
        assert calculate_baseline_trend(_series([0, 0, 0, 5, 5, 5])) == 0.0

    def test_uses_date_order(self):
        records = _series([10] * 5 + [15] * 5)
        assert calculate_baseline_trend(list(reversed(records))) == pytest.approx(0.5)
