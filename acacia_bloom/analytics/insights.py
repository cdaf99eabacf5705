"""
Insights and recommendations derived from a prediction series.

Insights: trend label, weekly seasonality label, key drivers, Kenya
context factors.
Recommendations: stock levels (+20% buffer), order dates (3 days ahead of
demand jumps), price multipliers, marketing opportunities.
"""

from datetime import timedelta
from typing import List, Sequence
import logging

from ..config import DEFAULT_BASE_DEMAND
from ..domain.models import (
    DemandPrediction,
    ForecastingInputs,
    ForecastInsights,
    Recommendations,
)
from ..utils.rounding import round_half_up

logger = logging.getLogger(__name__)


TREND_CHANGE_THRESHOLD = 0.15
WEATHER_DRIVER_THRESHOLD = 10.0
SEASONAL_DRIVER_THRESHOLD = 10.0
EVENTS_DRIVER_THRESHOLD = 15.0

STOCK_BUFFER = 1.2
DEMAND_JUMP_RATIO = 1.2
ORDER_LEAD_DAYS = 3

HIGH_DEMAND_LEVEL = 1.3
LOW_DEMAND_LEVEL = 0.7
HIGH_DEMAND_PRICE = 1.1
LOW_DEMAND_PRICE = 0.95

AGRICULTURAL_CATEGORIES = frozenset({"maize", "rice"})
STANDING_KENYA_FACTORS = ("M-Pesa payment patterns", "Fuel price volatility")

DRIVER_WEATHER = "Weather patterns"
DRIVER_SEASONAL = "Seasonal trends"
DRIVER_EVENTS = "Social events"
DRIVER_DEFAULT = "Market dynamics"


# ---------------------------------------------------------------------------
# Insights
# ---------------------------------------------------------------------------

def analyze_trend(predictions: Sequence[DemandPrediction]) -> str:
    """First vs last predicted value, ±15%."""
    first = predictions[0].predicted_demand
    last = predictions[-1].predicted_demand
    if first == 0:
        return "increasing" if last > 0 else "stable"

    change = (last - first) / first
    if change > TREND_CHANGE_THRESHOLD:
        return "increasing"
    if change < -TREND_CHANGE_THRESHOLD:
        return "decreasing"
    return "stable"


def weekly_buckets(predictions: Sequence[DemandPrediction]) -> List[float]:
    """Sum of predictions per 7-day bucket (last bucket may be partial)."""
    return [
        sum(p.predicted_demand for p in predictions[i:i + 7])
        for i in range(0, len(predictions), 7)
    ]


def analyze_seasonality(predictions: Sequence[DemandPrediction]) -> str:
    weekly = weekly_buckets(predictions)
    if len(weekly) < 2:
        return "insufficient_data"
    return "seasonal_increase_expected" if weekly[-1] > weekly[0] else "seasonal_stability"


def identify_key_drivers(predictions: Sequence[DemandPrediction]) -> List[str]:
    """Factors whose mean absolute deviation exceeds the reporting threshold."""
    n = len(predictions)
    avg_weather = sum(abs(p.factors.weather) for p in predictions) / n
    avg_seasonal = sum(abs(p.factors.seasonal) for p in predictions) / n
    avg_events = sum(abs(p.factors.events) for p in predictions) / n

    drivers = []
    if avg_weather > WEATHER_DRIVER_THRESHOLD:
        drivers.append(DRIVER_WEATHER)
    if avg_seasonal > SEASONAL_DRIVER_THRESHOLD:
        drivers.append(DRIVER_SEASONAL)
    if avg_events > EVENTS_DRIVER_THRESHOLD:
        drivers.append(DRIVER_EVENTS)

    return drivers or [DRIVER_DEFAULT]


def identify_kenya_factors(inputs: ForecastingInputs) -> List[str]:
    factors = []
    if inputs.location.county == "Nairobi":
        factors.append("Urban market dynamics")
    if inputs.product_category in AGRICULTURAL_CATEGORIES:
        factors.append("Agricultural seasonality")
    factors.extend(STANDING_KENYA_FACTORS)
    return factors


def generate_insights(
    predictions: Sequence[DemandPrediction],
    inputs: ForecastingInputs,
) -> ForecastInsights:
    return ForecastInsights(
        trend=analyze_trend(predictions),
        seasonality=analyze_seasonality(predictions),
        key_drivers=tuple(identify_key_drivers(predictions)),
        kenya_factors=tuple(identify_kenya_factors(inputs)),
    )


# ---------------------------------------------------------------------------
# Recommendations
# ---------------------------------------------------------------------------

def calculate_stock_levels(predictions: Sequence[DemandPrediction]) -> List[int]:
    return [round_half_up(p.predicted_demand * STOCK_BUFFER) for p in predictions]


def calculate_order_timing(predictions: Sequence[DemandPrediction]) -> List:
    """
    Order dates: ORDER_LEAD_DAYS before every day whose next day jumps by
    more than 20%.

    Dates may fall before the forecast start when the jump is at the
    beginning of the horizon.
    """
    order_dates = []
    for current, following in zip(predictions, predictions[1:]):
        if following.predicted_demand > current.predicted_demand * DEMAND_JUMP_RATIO:
            order_dates.append(current.date - timedelta(days=ORDER_LEAD_DAYS))
    return order_dates


def calculate_price_optimization(
    predictions: Sequence[DemandPrediction],
    base_demand: float = DEFAULT_BASE_DEMAND,
) -> List[float]:
    """Price multiplier per day from demand normalized by base_demand."""
    multipliers = []
    for p in predictions:
        demand_level = p.predicted_demand / base_demand if base_demand > 0 else 1.0
        if demand_level > HIGH_DEMAND_LEVEL:
            multipliers.append(HIGH_DEMAND_PRICE)
        elif demand_level < LOW_DEMAND_LEVEL:
            multipliers.append(LOW_DEMAND_PRICE)
        else:
            multipliers.append(1.0)
    return multipliers


def identify_marketing_opportunities(insights: ForecastInsights) -> List[str]:
    opportunities = []
    if insights.trend == "increasing":
        opportunities.append("Promote bulk buying for growing demand")
    if DRIVER_EVENTS in insights.key_drivers:
        opportunities.append("Create event-specific marketing campaigns")
    opportunities.append("Target group buying pools during peak demand")
    return opportunities


def generate_recommendations(
    predictions: Sequence[DemandPrediction],
    insights: ForecastInsights,
    base_demand: float = DEFAULT_BASE_DEMAND,
) -> Recommendations:
    order_timing = calculate_order_timing(predictions)
    if order_timing:
        logger.debug(f"{len(order_timing)} demand jumps found, first order date {order_timing[0]}")

    return Recommendations(
        stock_levels=tuple(calculate_stock_levels(predictions)),
        order_timing=tuple(order_timing),
        price_optimization=tuple(calculate_price_optimization(predictions, base_demand)),
        marketing_opportunities=tuple(identify_marketing_opportunities(insights)),
    )
