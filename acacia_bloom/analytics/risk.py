"""
Risk assessment: four independent 0-100 scores.

- weather:      60 rainy season, 20 otherwise, 30 without weather data
- economic:     20 base, +30 inflation > 10%, +25 unemployment > 20%,
                capped at 90; 40 without indicators
- competition:  70 urban, 40 rural
- supply chain: 60 import-dependent categories, 30 otherwise
"""
from typing import Optional

from ..domain.models import EconomicIndicators, ForecastingInputs, Location, RiskFactors, Season, WeatherData


IMPORT_DEPENDENT_CATEGORIES = frozenset({"electronics", "clothing", "manufactured"})
MAX_ECONOMIC_RISK = 90


def calculate_weather_risk(weather: Optional[WeatherData]) -> int:
    if weather is None:
        return 30
    return 60 if weather.season == Season.RAINY else 20


def calculate_economic_risk(indicators: Optional[EconomicIndicators]) -> int:
    if indicators is None:
        return 40
    risk = 20
    if indicators.inflation_rate > 0.1:
        risk += 30
    if indicators.unemployment_rate > 0.2:
        risk += 25
    return min(MAX_ECONOMIC_RISK, risk)


def calculate_competition_risk(location: Location) -> int:
    return 70 if location.is_urban else 40


def calculate_supply_chain_risk(product_category: str) -> int:
    return 60 if product_category in IMPORT_DEPENDENT_CATEGORIES else 30


def assess_risk_factors(inputs: ForecastingInputs) -> RiskFactors:
    return RiskFactors(
        weather_risk=calculate_weather_risk(inputs.weather_data),
        economic_risk=calculate_economic_risk(inputs.economic_indicators),
        competition_risk=calculate_competition_risk(inputs.location),
        supply_chain_risk=calculate_supply_chain_risk(inputs.product_category),
    )
