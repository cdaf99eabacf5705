"""
Historical sales analysis: pattern summary and baseline trend.

Approach:
- Moving average: 7-day simple moving average over the date-sorted series
- Trend: first vs last moving average (±10% threshold)
- Volatility: coefficient of variation (population std / mean)
- Weekly seasonality: day-of-week factors (mean qty/overall mean per weekday)

Fallback for short history:
- < 7 records: no analysis, trend "insufficient_data"
- 7-13 records: analysis, weekly seasonality "undetermined"
- >= 14 records: full analysis
"""

from datetime import date
from typing import List, Sequence
import logging
import statistics

import numpy as np

from ..config import MIN_HISTORY_RECORDS, MOVING_AVERAGE_WINDOW
from .models import HistoricalPatterns, SalesRecord

logger = logging.getLogger(__name__)


TREND_THRESHOLD = 0.10
MIN_SAMPLES_FOR_DOW = 14
WEEKLY_SPREAD_THRESHOLD = 0.3


def sort_sales(records: Sequence[SalesRecord]) -> List[SalesRecord]:
    """Return records sorted by date (oldest first); input is left untouched."""
    return sorted(records, key=lambda r: r.date)


def calculate_moving_averages(quantities: Sequence[float], window: int = MOVING_AVERAGE_WINDOW) -> List[float]:
    """
    Trailing simple moving average.

    Returns len(quantities) - window + 1 values (empty if the series is
    shorter than the window).
    """
    if window <= 0 or len(quantities) < window:
        return []
    kernel = np.ones(window) / window
    return np.convolve(np.asarray(quantities, dtype=float), kernel, mode="valid").tolist()


def detect_trend(moving_averages: Sequence[float], threshold: float = TREND_THRESHOLD) -> str:
    """Classify the moving-average series as increasing/decreasing/stable."""
    if len(moving_averages) < 2:
        return "stable"

    first = moving_averages[0]
    last = moving_averages[-1]
    if first == 0:
        return "increasing" if last > 0 else "stable"

    change = (last - first) / first
    if change > threshold:
        return "increasing"
    if change < -threshold:
        return "decreasing"
    return "stable"


def coefficient_of_variation(values: Sequence[float]) -> float:
    """Population standard deviation / mean; 0.0 for empty or zero-mean series."""
    if len(values) == 0:
        return 0.0
    arr = np.asarray(values, dtype=float)
    mean = float(arr.mean())
    if mean == 0:
        return 0.0
    return float(arr.std()) / mean


def calculate_dow_factors(dates: Sequence[date], quantities: Sequence[float]) -> List[float]:
    """
    Day-of-week factors (Mon=0 to Sun=6), normalized to mean 1.0.

    For each weekday, mean(qty / overall_mean) across its samples; weekdays
    with no data get the neutral 1.0.
    """
    overall = statistics.mean(quantities) if quantities else 0.0
    if overall <= 0:
        return [1.0] * 7

    dow_groups = [[] for _ in range(7)]
    for d, qty in zip(dates, quantities):
        dow_groups[d.weekday()].append(qty / overall)

    dow_factors = []
    for group in dow_groups:
        factor = statistics.mean(group) if group else 1.0
        dow_factors.append(max(0.1, factor))  # Min 0.1 to avoid zero factors

    mean_factor = statistics.mean(dow_factors)
    if mean_factor > 0:
        dow_factors = [f / mean_factor for f in dow_factors]

    return dow_factors


def identify_weekly_seasonality(dow_factors: Sequence[float], n_samples: int) -> str:
    """Label weekly seasonality from the spread of day-of-week factors."""
    if n_samples < MIN_SAMPLES_FOR_DOW:
        return "undetermined"
    spread = max(dow_factors) - min(dow_factors)
    return "weekly" if spread > WEEKLY_SPREAD_THRESHOLD else "none"


def analyze_historical_patterns(records: Sequence[SalesRecord]) -> HistoricalPatterns:
    """
    Summarize a raw sales series.

    Args:
        records: Sales records in any order

    Returns:
        HistoricalPatterns; has_data=False when fewer than 7 records
    """
    if len(records) < MIN_HISTORY_RECORDS:
        logger.debug(f"Insufficient history for pattern analysis ({len(records)} < {MIN_HISTORY_RECORDS} records)")
        return HistoricalPatterns(
            has_data=False,
            trend="insufficient_data",
            n_samples=len(records),
        )

    sorted_records = sort_sales(records)
    dates = [r.date for r in sorted_records]
    quantities = [float(r.quantity) for r in sorted_records]

    moving_averages = calculate_moving_averages(quantities)
    dow_factors = calculate_dow_factors(dates, quantities)

    return HistoricalPatterns(
        has_data=True,
        trend=detect_trend(moving_averages),
        volatility=coefficient_of_variation(quantities),
        average_daily_demand=statistics.mean(quantities),
        moving_averages=tuple(moving_averages),
        seasonality=identify_weekly_seasonality(dow_factors, len(quantities)),
        dow_factors=tuple(dow_factors),
        n_samples=len(quantities),
    )


def calculate_baseline_trend(records: Sequence[SalesRecord]) -> float:
    """
    Relative change between the later and earlier halves of the history.

    Returns:
        (second_half_avg - first_half_avg) / first_half_avg; 0.0 with fewer
        than 2 records or a zero first-half average
    """
    if len(records) < 2:
        return 0.0

    quantities = [float(r.quantity) for r in sort_sales(records)]
    mid = len(quantities) // 2
    first_avg = statistics.mean(quantities[:mid])
    second_avg = statistics.mean(quantities[mid:])

    if first_avg == 0:
        logger.warning("First half of sales history averages zero; baseline trend set to 0")
        return 0.0

    return (second_avg - first_avg) / first_avg
