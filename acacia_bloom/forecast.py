"""
Daily demand prediction: fusion of the independent multiplier models.

Model:
    baseline_i = base_demand × max(MIN_MULTIPLIER, 1 + trend × i / trend_window)
    demand_i   = baseline_i × seasonal_i × weather_i × events_i × economic

Scalars (economic) are broadcast across the horizon; the fold runs in
float64 and nothing is rounded until display.

Output: one DemandPrediction per day, always non-negative, with a
symmetric ±band confidence interval.
"""

from datetime import date
from typing import List, Sequence, Union
import logging

import numpy as np

from .config import DEFAULT_BASE_DEMAND, DEFAULT_CONFIDENCE_BAND, DEFAULT_TREND_WINDOW_DAYS, MIN_MULTIPLIER
from .domain.calendar import horizon_dates
from .domain.models import ConfidenceInterval, DemandPrediction, FactorBreakdown

logger = logging.getLogger(__name__)


MultiplierSeries = Union[float, Sequence[float]]


def broadcast_multiplier(multiplier: MultiplierSeries, forecast_days: int) -> np.ndarray:
    """
    Turn a scalar or per-day series into a float array of forecast_days values.

    Series shorter than the horizon are padded with the neutral 1.0; every
    value is floored at MIN_MULTIPLIER.
    """
    if np.isscalar(multiplier):
        values = np.full(forecast_days, float(multiplier))
    else:
        values = np.ones(forecast_days)
        series = np.asarray(multiplier, dtype=float)[:forecast_days]
        values[: len(series)] = series
    return np.maximum(values, MIN_MULTIPLIER)


def trend_multipliers(trend: float, forecast_days: int, trend_window_days: int = DEFAULT_TREND_WINDOW_DAYS) -> np.ndarray:
    """Linear trend ramp 1 + trend × i / window, floored at MIN_MULTIPLIER."""
    offsets = np.arange(forecast_days, dtype=float)
    return np.maximum(1.0 + trend * offsets / trend_window_days, MIN_MULTIPLIER)


def percent_deviation(multiplier: float) -> float:
    """(multiplier - 1) × 100."""
    return (multiplier - 1.0) * 100.0


def generate_daily_predictions(
    baseline_trend: float,
    seasonal: MultiplierSeries,
    weather: MultiplierSeries,
    events: MultiplierSeries,
    economic: MultiplierSeries,
    forecast_days: int,
    start_date: date,
    base_demand: float = DEFAULT_BASE_DEMAND,
    confidence_band: float = DEFAULT_CONFIDENCE_BAND,
    trend_window_days: int = DEFAULT_TREND_WINDOW_DAYS,
) -> List[DemandPrediction]:
    """
    Generate day-by-day predictions.

    Args:
        baseline_trend: Relative trend ratio from the sales history
        seasonal: Seasonal multiplier (scalar or per-day)
        weather: Weather multiplier (scalar or per-day)
        events: Event multiplier (scalar or per-day)
        economic: Economic multiplier (scalar or per-day)
        forecast_days: Horizon length (H)
        start_date: Date of day 0
        base_demand: Reference daily demand
        confidence_band: Interval half-width as a fraction (0.2 = ±20%)
        trend_window_days: Days over which the trend ratio is fully applied

    Returns:
        List of H DemandPrediction objects with consecutive dates
    """
    if base_demand < 0:
        raise ValueError(f"base_demand must be >= 0, got {base_demand}")
    if not (0.0 <= confidence_band < 1.0):
        raise ValueError(f"confidence_band must be in [0, 1), got {confidence_band}")
    if trend_window_days <= 0:
        raise ValueError(f"trend_window_days must be > 0, got {trend_window_days}")

    trend = trend_multipliers(baseline_trend, forecast_days, trend_window_days)
    components = {
        "seasonal": broadcast_multiplier(seasonal, forecast_days),
        "weather": broadcast_multiplier(weather, forecast_days),
        "events": broadcast_multiplier(events, forecast_days),
        "economic": broadcast_multiplier(economic, forecast_days),
    }

    baseline = base_demand * trend
    demand = baseline.copy()
    for series in components.values():
        demand = demand * series

    logger.debug(
        f"Fused {forecast_days} days: trend={baseline_trend:.4f}, "
        f"mean demand={float(demand.mean()) if forecast_days else 0.0:.2f}"
    )

    predictions = []
    for i, day in enumerate(horizon_dates(start_date, forecast_days)):
        value = float(demand[i])
        predictions.append(DemandPrediction(
            date=day,
            predicted_demand=value,
            confidence_interval=ConfidenceInterval(
                low=value * (1.0 - confidence_band),
                high=value * (1.0 + confidence_band),
            ),
            factors=FactorBreakdown(
                baseline=percent_deviation(float(trend[i])),
                weather=percent_deviation(float(components["weather"][i])),
                seasonal=percent_deviation(float(components["seasonal"][i])),
                events=percent_deviation(float(components["events"][i])),
                economic=percent_deviation(float(components["economic"][i])),
            ),
        ))

    return predictions
