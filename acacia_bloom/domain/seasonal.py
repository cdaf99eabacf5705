"""
Seasonal adjustment engine.

Two multiplicative layers per forecast day:
1. Category calendar: harvest months lower demand, shortage months raise it
   (vegetables use rainy/dry months in the same slots)
2. Generic Kenyan macro-season: Jun-Aug dry season x1.1, Mar-May long
   rains x0.9, irrespective of category
"""
from dataclasses import dataclass
from datetime import date
from types import MappingProxyType
from typing import FrozenSet, List, Mapping

from .calendar import horizon_months


@dataclass(frozen=True)
class SeasonalPattern:
    """Category calendar: low-demand (harvest) and high-demand (shortage) months."""
    harvest_months: FrozenSet[int]
    shortage_months: FrozenSet[int]
    harvest_multiplier: float
    shortage_multiplier: float

    def multiplier_for(self, month: int) -> float:
        if month in self.harvest_months:
            return self.harvest_multiplier
        if month in self.shortage_months:
            return self.shortage_multiplier
        return 1.0


SEASONAL_PATTERNS: Mapping[str, SeasonalPattern] = MappingProxyType({
    "maize": SeasonalPattern(
        harvest_months=frozenset({10, 11, 12}),  # Oct-Dec
        shortage_months=frozenset({6, 7, 8}),    # Jun-Aug
        harvest_multiplier=0.8,
        shortage_multiplier=1.4,
    ),
    "rice": SeasonalPattern(
        harvest_months=frozenset({3, 4, 5}),     # Mar-May (Mwea harvest)
        shortage_months=frozenset({11, 12, 1}),  # Nov-Jan
        harvest_multiplier=0.9,
        shortage_multiplier=1.3,
    ),
    "vegetables": SeasonalPattern(
        harvest_months=frozenset({3, 4, 5, 10, 11}),        # rainy season
        shortage_months=frozenset({6, 7, 8, 9, 12, 1, 2}),  # dry season
        harvest_multiplier=0.7,
        shortage_multiplier=1.5,
    ),
})

DRY_SEASON_MONTHS = frozenset({6, 7, 8})
RAINY_SEASON_MONTHS = frozenset({3, 4, 5})
DRY_SEASON_MULTIPLIER = 1.1
RAINY_SEASON_MULTIPLIER = 0.9


def macro_season_multiplier(month: int) -> float:
    """Generic Kenyan seasonal adjustment for a calendar month."""
    if month in DRY_SEASON_MONTHS:
        return DRY_SEASON_MULTIPLIER
    if month in RAINY_SEASON_MONTHS:
        return RAINY_SEASON_MULTIPLIER
    return 1.0


def seasonal_multiplier(product_category: str, month: int) -> float:
    """Combined category x macro-season multiplier for one month."""
    pattern = SEASONAL_PATTERNS.get(product_category)
    adjustment = pattern.multiplier_for(month) if pattern is not None else 1.0
    return adjustment * macro_season_multiplier(month)


def calculate_seasonal_adjustments(
    product_category: str,
    forecast_days: int,
    start_date: date,
) -> List[float]:
    """
    One seasonal multiplier per forecast day.

    Args:
        product_category: Category key (unknown categories start at 1.0)
        forecast_days: Horizon length
        start_date: Day 0 of the horizon

    Returns:
        List of forecast_days multipliers
    """
    return [
        seasonal_multiplier(product_category, month)
        for month in horizon_months(start_date, forecast_days)
    ]
