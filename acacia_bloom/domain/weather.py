"""
Weather impact model.

Static category x season lookup; the resulting scalar is broadcast over the
whole horizon because the weather input is a single snapshot. No weather
input means a neutral 1.0 for every day.

The optional shelf-stability layer adds a second season-driven adjustment:
fresh produce sells less in the rains, shelf-stable staples more, and
drinks more in the dry season.
"""
from types import MappingProxyType
from typing import List, Mapping, Optional

from .models import Season, WeatherData


WEATHER_IMPACTS: Mapping[str, Mapping[Season, float]] = MappingProxyType({
    "vegetables": MappingProxyType({Season.RAINY: 0.7, Season.DRY: 1.3, Season.TRANSITIONAL: 1.0}),
    "flour": MappingProxyType({Season.RAINY: 1.2, Season.DRY: 1.0, Season.TRANSITIONAL: 1.0}),
    "beverages": MappingProxyType({Season.RAINY: 0.8, Season.DRY: 1.5, Season.TRANSITIONAL: 1.0}),
    "rice": MappingProxyType({Season.RAINY: 1.1, Season.DRY: 1.0, Season.TRANSITIONAL: 1.0}),
})

FRESH_PRODUCE_CATEGORIES = frozenset({"vegetables", "fresh_produce"})
SHELF_STABLE_CATEGORIES = frozenset({"flour", "rice", "canned_goods"})
DRINK_CATEGORIES = frozenset({"water", "beverages"})


def weather_multiplier(weather: Optional[WeatherData], product_category: str) -> float:
    """Category x season lookup; 1.0 for absent weather or unlisted combinations."""
    if weather is None:
        return 1.0
    return WEATHER_IMPACTS.get(product_category, {}).get(weather.season, 1.0)


def shelf_stability_multiplier(weather: Optional[WeatherData], product_category: str) -> float:
    if weather is None:
        return 1.0
    if weather.season == Season.RAINY:
        if product_category in FRESH_PRODUCE_CATEGORIES:
            return 0.8
        if product_category in SHELF_STABLE_CATEGORIES:
            return 1.2
    elif weather.season == Season.DRY:
        if product_category in DRINK_CATEGORIES:
            return 1.4
    return 1.0


def calculate_weather_impact(
    weather: Optional[WeatherData],
    product_category: str,
    forecast_days: int,
    apply_shelf_stability_layer: bool = False,
) -> List[float]:
    """
    Weather multiplier per forecast day.

    Args:
        weather: Weather snapshot or None
        product_category: Category key
        forecast_days: Horizon length
        apply_shelf_stability_layer: Compose the shelf-stability adjustment

    Returns:
        List of forecast_days multipliers (all equal)
    """
    impact = weather_multiplier(weather, product_category)
    if apply_shelf_stability_layer:
        impact *= shelf_stability_multiplier(weather, product_category)
    return [impact] * forecast_days
