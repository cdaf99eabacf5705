"""
Domain models for the Acacia Bloom forecasting engine.

Pure data classes + value objects. No I/O, no side effects.
Every object is created fresh per forecast call and never mutated.
"""
from dataclasses import dataclass
from enum import Enum
from datetime import date as Date
from typing import List, Optional, Tuple
import math


class Season(Enum):
    """Kenyan macro-season reported with the weather snapshot."""
    DRY = "dry"
    RAINY = "rainy"
    TRANSITIONAL = "transitional"


class SocialEventType(Enum):
    """Kind of calendar/social event."""
    HOLIDAY = "holiday"
    ELECTION = "election"
    HARVEST = "harvest"
    SCHOOL = "school"
    RELIGIOUS = "religious"


class TreeState(Enum):
    """Growth stage of the acacia visualization (demand intensity)."""
    SEEDLING = "seedling"
    GROWING = "growing"
    BLOOMING = "blooming"
    MATURE = "mature"
    ABUNDANT = "abundant"


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SalesRecord:
    """One historical sales observation - immutable."""
    date: Date
    quantity: float
    price: float = 0.0
    location: str = ""

    def __post_init__(self):
        if not math.isfinite(self.quantity):
            raise ValueError(f"Sales quantity must be a finite number, got {self.quantity}")
        if self.quantity < 0:
            raise ValueError(f"Sales quantity cannot be negative, got {self.quantity}")


@dataclass(frozen=True)
class WeatherData:
    """Already-resolved weather snapshot for the selling location."""
    temperature: float
    rainfall: float  # mm
    humidity: float
    season: Season

    def __post_init__(self):
        if not isinstance(self.season, Season):
            raise ValueError(f"season must be a Season, got {self.season!r}")
        if self.rainfall < 0:
            raise ValueError("Rainfall cannot be negative")


@dataclass(frozen=True)
class SocialEvent:
    """
    Date-ranged event overlaying demand.

    An inverted range (end_date < start_date) is accepted here; the event
    impact model treats it as a no-op instead of failing the forecast.
    """
    name: str
    type: SocialEventType
    impact: float  # 0.5-2.0 multiplier, used when the name is not a known holiday
    start_date: Date
    end_date: Date

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Event name cannot be empty")
        if not math.isfinite(self.impact):
            raise ValueError(f"Event impact must be a finite number, got {self.impact}")
        if self.impact < 0.5 or self.impact > 2.0:
            raise ValueError(f"Event impact must be between 0.5 and 2.0, got {self.impact}")

    @property
    def is_valid_range(self) -> bool:
        return self.start_date <= self.end_date

    def covers(self, day: Date) -> bool:
        """True if day falls inside [start_date, end_date] (inclusive)."""
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class EconomicIndicators:
    """Macroeconomic snapshot; rates are fractions (0.07 = 7%)."""
    inflation_rate: float
    unemployment_rate: float
    currency_rate: float  # KES per USD
    fuel_price: float     # KES per liter

    def __post_init__(self):
        if self.inflation_rate < 0:
            raise ValueError("Inflation rate cannot be negative")
        if self.unemployment_rate < 0:
            raise ValueError("Unemployment rate cannot be negative")
        if self.currency_rate < 0:
            raise ValueError("Currency rate cannot be negative")
        if self.fuel_price < 0:
            raise ValueError("Fuel price cannot be negative")


@dataclass(frozen=True)
class Location:
    """Selling location."""
    county: str
    is_urban: bool
    population: int = 0

    def __post_init__(self):
        if self.population < 0:
            raise ValueError("Population cannot be negative")


@dataclass(frozen=True)
class ForecastingInputs:
    """
    Caller-supplied inputs for one product forecast.

    Optional inputs (weather, events, economic indicators) are modelled as
    None when absent; each model resolves "absent" to its neutral value.
    """
    product_id: str
    product_category: str
    historical_sales: Tuple[SalesRecord, ...]
    location: Location
    weather_data: Optional[WeatherData] = None
    social_events: Optional[Tuple[SocialEvent, ...]] = None
    economic_indicators: Optional[EconomicIndicators] = None

    def __post_init__(self):
        if not self.product_id or not self.product_id.strip():
            raise ValueError("Product id cannot be empty")
        if self.location is None:
            raise ValueError("Location is required")
        # Normalize sequences to tuples so the inputs stay immutable
        object.__setattr__(self, "historical_sales", tuple(self.historical_sales or ()))
        if self.social_events is not None:
            object.__setattr__(self, "social_events", tuple(self.social_events))

    @property
    def events(self) -> Tuple[SocialEvent, ...]:
        return self.social_events or ()


# ---------------------------------------------------------------------------
# Intermediate results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HistoricalPatterns:
    """Summary of the historical sales series."""
    has_data: bool
    trend: str  # "increasing" | "decreasing" | "stable" | "insufficient_data"
    volatility: float = 0.0  # coefficient of variation
    average_daily_demand: float = 0.0
    moving_averages: Tuple[float, ...] = ()
    seasonality: str = "undetermined"  # "weekly" | "none" | "undetermined"
    dow_factors: Tuple[float, ...] = (1.0,) * 7
    n_samples: int = 0


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConfidenceInterval:
    low: float
    high: float


@dataclass(frozen=True)
class FactorBreakdown:
    """Percent deviation from neutral per component (informational only)."""
    baseline: float
    weather: float
    seasonal: float
    events: float
    economic: float


@dataclass(frozen=True)
class DemandPrediction:
    """Forecast for one day."""
    date: Date
    predicted_demand: float
    confidence_interval: ConfidenceInterval
    factors: FactorBreakdown

    def __post_init__(self):
        if self.predicted_demand < 0:
            raise ValueError(f"predicted_demand must be >= 0, got {self.predicted_demand}")
        if not (self.confidence_interval.low <= self.predicted_demand <= self.confidence_interval.high):
            raise ValueError("Confidence interval must contain the predicted demand")


@dataclass(frozen=True)
class AcaciaVisualization:
    tree_state: TreeState
    leaf_count: int
    bloom_intensity: int
    seasonal_pattern: str


@dataclass(frozen=True)
class ForecastInsights:
    trend: str
    seasonality: str
    key_drivers: Tuple[str, ...]
    kenya_factors: Tuple[str, ...]


@dataclass(frozen=True)
class Recommendations:
    stock_levels: Tuple[int, ...]
    order_timing: Tuple[Date, ...]
    price_optimization: Tuple[float, ...]
    marketing_opportunities: Tuple[str, ...]


@dataclass(frozen=True)
class RiskFactors:
    """Independent 0-100 risk scores."""
    weather_risk: int
    economic_risk: int
    competition_risk: int
    supply_chain_risk: int

    def __post_init__(self):
        for name in ("weather_risk", "economic_risk", "competition_risk", "supply_chain_risk"):
            value = getattr(self, name)
            if value < 0 or value > 100:
                raise ValueError(f"{name} must be between 0 and 100, got {value}")


@dataclass(frozen=True)
class ForecastResult:
    """Complete output of one forecast call."""
    predictions: Tuple[DemandPrediction, ...]
    confidence: int
    acacia_visualization: AcaciaVisualization
    insights: ForecastInsights
    recommendations: Recommendations
    risk_factors: RiskFactors

    @property
    def horizon(self) -> int:
        return len(self.predictions)

    def demand_series(self) -> List[float]:
        return [p.predicted_demand for p in self.predictions]
