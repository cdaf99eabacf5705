"""
Economic impact model: one composite multiplier per forecast.

Rules (applied in order, all multiplicative):
- inflation > 5%        → x (1 - inflation * 0.5)
- unemployment > 15%    → x (1 - unemployment * 0.3)
- KES/USD > 130 (weak)  → x 0.90  (imported goods get dearer)
- fuel > 180 KES/l      → x 0.95  (transport costs)
- county purchasing power (always, default 1.0)
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from ..config import MIN_MULTIPLIER
from .models import EconomicIndicators, Location


INFLATION_THRESHOLD = 0.05
UNEMPLOYMENT_THRESHOLD = 0.15
WEAK_CURRENCY_THRESHOLD = 130.0
HIGH_FUEL_PRICE_THRESHOLD = 180.0
WEAK_CURRENCY_MULTIPLIER = 0.9
HIGH_FUEL_PRICE_MULTIPLIER = 0.95


@dataclass(frozen=True)
class CountyProfile:
    urbanization: float
    purchasing_power: float
    volatility: float


COUNTY_CHARACTERISTICS: Mapping[str, CountyProfile] = MappingProxyType({
    "Nairobi": CountyProfile(urbanization=0.9, purchasing_power=1.3, volatility=0.8),
    "Mombasa": CountyProfile(urbanization=0.8, purchasing_power=1.1, volatility=0.9),
    "Kisumu": CountyProfile(urbanization=0.6, purchasing_power=0.9, volatility=1.2),
    "Nakuru": CountyProfile(urbanization=0.5, purchasing_power=1.0, volatility=1.0),
    "Meru": CountyProfile(urbanization=0.3, purchasing_power=0.8, volatility=1.4),
})


def county_purchasing_power(county: str) -> float:
    profile = COUNTY_CHARACTERISTICS.get(county)
    return profile.purchasing_power if profile is not None else 1.0


def indicators_multiplier(indicators: Optional[EconomicIndicators]) -> float:
    """Product of the four macro rules; 1.0 when indicators are absent."""
    if indicators is None:
        return 1.0

    impact = 1.0
    if indicators.inflation_rate > INFLATION_THRESHOLD:
        impact *= 1 - indicators.inflation_rate * 0.5
    if indicators.unemployment_rate > UNEMPLOYMENT_THRESHOLD:
        impact *= 1 - indicators.unemployment_rate * 0.3
    if indicators.currency_rate > WEAK_CURRENCY_THRESHOLD:
        impact *= WEAK_CURRENCY_MULTIPLIER
    if indicators.fuel_price > HIGH_FUEL_PRICE_THRESHOLD:
        impact *= HIGH_FUEL_PRICE_MULTIPLIER
    return impact


def calculate_economic_impact(
    indicators: Optional[EconomicIndicators],
    location: Location,
) -> float:
    """Composite economic multiplier, floored at MIN_MULTIPLIER."""
    impact = indicators_multiplier(indicators) * county_purchasing_power(location.county)
    return max(MIN_MULTIPLIER, impact)
