"""Acacia Bloom: multi-factor demand forecasting for Kenyan marketplace products."""
from .config import load_settings
from .engine import AcaciaBloomEngine, generate_forecast
from .domain.models import (
    EconomicIndicators,
    ForecastingInputs,
    ForecastResult,
    Location,
    SalesRecord,
    Season,
    SocialEvent,
    SocialEventType,
    WeatherData,
)

__version__ = "0.1.0"

__all__ = [
    "AcaciaBloomEngine",
    "generate_forecast",
    "load_settings",
    "EconomicIndicators",
    "ForecastingInputs",
    "ForecastResult",
    "Location",
    "SalesRecord",
    "Season",
    "SocialEvent",
    "SocialEventType",
    "WeatherData",
]
