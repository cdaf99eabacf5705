"""
Acacia Bloom demand forecasting engine.

Pipeline (single flow, one call per product):
    analyze_historical_patterns() + calculate_baseline_trend()
    calculate_seasonal_adjustments() / calculate_weather_impact()
    calculate_events_impact() / calculate_economic_impact()
        → generate_daily_predictions()
            → ConfidenceScorer / generate_acacia_visualization()
              generate_insights() → generate_recommendations()
              assess_risk_factors()
                → ForecastResult

The engine holds only read-only settings, so one instance can serve
concurrent calls.  "today" is the only implicit input and is resolved once
at the boundary.
"""

from datetime import date
from typing import Any, Dict, Optional
import logging

from .analytics.confidence import ConfidenceScorer
from .analytics.insights import generate_insights, generate_recommendations
from .analytics.risk import assess_risk_factors
from .analytics.visualization import generate_acacia_visualization
from .config import (
    DEFAULT_BASE_DEMAND,
    DEFAULT_CONFIDENCE_BAND,
    DEFAULT_FORECAST_DAYS,
    DEFAULT_TREND_WINDOW_DAYS,
    get_numeric_setting,
    get_setting,
    merge_settings,
)
from .domain.economic import calculate_economic_impact
from .domain.event_impact import calculate_events_impact, merge_calendar_events
from .domain.history import analyze_historical_patterns, calculate_baseline_trend
from .domain.holidays import public_holiday_events
from .domain.models import ForecastingInputs, ForecastResult, HistoricalPatterns
from .domain.seasonal import calculate_seasonal_adjustments
from .domain.validation import validate_forecast_days, validate_sales_history
from .domain.weather import calculate_weather_impact
from .forecast import generate_daily_predictions

logger = logging.getLogger(__name__)


class AcaciaBloomEngine:
    """Stateless multi-factor demand forecaster."""

    def __init__(self, settings: Optional[Dict[str, Any]] = None):
        """
        Args:
            settings: Settings overrides in the DEFAULT_SETTINGS shape
                      (merged over the defaults)
        """
        self.settings = merge_settings(settings)
        self.base_demand = get_numeric_setting(self.settings, "forecast", "base_demand", DEFAULT_BASE_DEMAND)
        self.baseline_source = get_setting(self.settings, "forecast", "baseline_source", "fixed")
        self.confidence_band = get_numeric_setting(
            self.settings, "forecast", "confidence_band", DEFAULT_CONFIDENCE_BAND
        )
        self.trend_window_days = int(
            get_numeric_setting(self.settings, "forecast", "trend_window_days", DEFAULT_TREND_WINDOW_DAYS)
        )
        self.include_public_holidays = bool(get_setting(self.settings, "events", "include_public_holidays", False))
        self.apply_shelf_stability_layer = bool(
            get_setting(self.settings, "weather", "apply_shelf_stability_layer", False)
        )
        self.confidence_scorer = ConfidenceScorer(self.settings)

        if self.baseline_source not in ("fixed", "history"):
            raise ValueError(f"baseline_source must be 'fixed' or 'history', got {self.baseline_source!r}")
        if self.base_demand <= 0:
            raise ValueError(f"base_demand must be > 0, got {self.base_demand}")

    def resolve_base_demand(self, patterns: HistoricalPatterns) -> float:
        """Reference demand: fixed, or the historical average when configured and available."""
        if self.baseline_source == "history" and patterns.has_data and patterns.average_daily_demand > 0:
            return patterns.average_daily_demand
        return self.base_demand

    def generate_forecast(
        self,
        inputs: ForecastingInputs,
        forecast_days: int = DEFAULT_FORECAST_DAYS,
        today: Optional[date] = None,
    ) -> ForecastResult:
        """
        Forecast daily demand for one product.

        Args:
            inputs: Caller-supplied forecasting inputs
            forecast_days: Horizon length (> 0)
            today: Day 0 of the horizon (defaults to date.today())

        Returns:
            ForecastResult with exactly forecast_days predictions

        Raises:
            ValueError: invalid horizon or missing location
        """
        is_valid, message = validate_forecast_days(forecast_days)
        if not is_valid:
            raise ValueError(message)
        if inputs.location is None:
            raise ValueError("inputs.location is required")
        if today is None:
            today = date.today()

        category = inputs.product_category
        logger.debug(f"Forecasting {inputs.product_id} ({category}) for {forecast_days} days from {today}")

        history_ok, history_message = validate_sales_history(inputs.historical_sales)
        if not history_ok:
            logger.warning(f"Sales history for {inputs.product_id}: {history_message}")

        # 1-2. History
        patterns = analyze_historical_patterns(inputs.historical_sales)
        if patterns.has_data:
            baseline_trend = calculate_baseline_trend(inputs.historical_sales)
        else:
            logger.warning(
                f"Insufficient sales history for {inputs.product_id} "
                f"({patterns.n_samples} records); using a flat baseline"
            )
            baseline_trend = 0.0

        # 3-6. Independent multiplier models
        seasonal = calculate_seasonal_adjustments(category, forecast_days, today)
        weather = calculate_weather_impact(
            inputs.weather_data, category, forecast_days,
            apply_shelf_stability_layer=self.apply_shelf_stability_layer,
        )
        events = list(inputs.events)
        if self.include_public_holidays:
            events = merge_calendar_events(events, public_holiday_events(today, forecast_days))
        events_impact = calculate_events_impact(events, category, forecast_days, today)
        economic = calculate_economic_impact(inputs.economic_indicators, inputs.location)

        # 7. Fusion
        base_demand = self.resolve_base_demand(patterns)
        predictions = generate_daily_predictions(
            baseline_trend=baseline_trend,
            seasonal=seasonal,
            weather=weather,
            events=events_impact,
            economic=economic,
            forecast_days=forecast_days,
            start_date=today,
            base_demand=base_demand,
            confidence_band=self.confidence_band,
            trend_window_days=self.trend_window_days,
        )

        # 8-11. Derived views
        confidence = self.confidence_scorer.score(patterns, predictions, inputs)
        visualization = generate_acacia_visualization(predictions, seasonal, base_demand)
        insights = generate_insights(predictions, inputs)
        recommendations = generate_recommendations(predictions, insights, base_demand)
        risk_factors = assess_risk_factors(inputs)

        logger.debug(
            f"Forecast {inputs.product_id}: confidence={confidence}, "
            f"tree={visualization.tree_state.value}, drivers={list(insights.key_drivers)}"
        )

        return ForecastResult(
            predictions=tuple(predictions),
            confidence=confidence,
            acacia_visualization=visualization,
            insights=insights,
            recommendations=recommendations,
            risk_factors=risk_factors,
        )


def generate_forecast(
    inputs: ForecastingInputs,
    forecast_days: int = DEFAULT_FORECAST_DAYS,
    today: Optional[date] = None,
    settings: Optional[Dict[str, Any]] = None,
) -> ForecastResult:
    """Convenience wrapper: AcaciaBloomEngine(settings).generate_forecast(...)."""
    return AcaciaBloomEngine(settings).generate_forecast(inputs, forecast_days, today)
