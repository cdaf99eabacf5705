"""
JSON payload codec.

Inputs arrive with the marketplace front end's camelCase keys and ISO
dates; results are emitted the same way, with display values rounded to
integers.

Inputs payload:
    {
      "productId": "P-1", "productCategory": "maize",
      "historicalSales": [{"date": "2026-01-01", "quantity": 12, "price": 90, "location": "Nairobi"}],
      "weatherData": {"temperature": 24, "rainfall": 5, "humidity": 60, "season": "dry"},
      "socialEvents": [{"name": "Christmas", "type": "holiday", "impact": 1.5,
                        "startDate": "2026-12-24", "endDate": "2026-12-26"}],
      "economicIndicators": {"inflationRate": 0.07, "unemploymentRate": 0.1,
                             "currencyRate": 129, "fuelPrice": 175},
      "location": {"county": "Nairobi", "isUrban": true, "population": 4400000}
    }
"""

from datetime import date, datetime
from typing import Any, Dict, Optional

from .domain.models import (
    DemandPrediction,
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
from .utils.rounding import round_half_up


def parse_date(value: Any) -> date:
    """Accept date, datetime or an ISO string (date or datetime)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD") from None
    raise TypeError(f"Cannot interpret {value!r} as a date")


def _bool_from_json(value: Any, field_name: str) -> bool:
    """Accept only JSON true/false."""
    if not isinstance(value, bool):
        raise ValueError(f"{field_name} must be true or false, got {value!r}")
    return value


def _sales_record_from_dict(data: Dict[str, Any]) -> SalesRecord:
    return SalesRecord(
        date=parse_date(data["date"]),
        quantity=float(data["quantity"]),
        price=float(data.get("price", 0.0)),
        location=str(data.get("location", "")),
    )


def _weather_from_dict(data: Optional[Dict[str, Any]]) -> Optional[WeatherData]:
    if data is None:
        return None
    return WeatherData(
        temperature=float(data.get("temperature", 0.0)),
        rainfall=float(data.get("rainfall", 0.0)),
        humidity=float(data.get("humidity", 0.0)),
        season=Season(data["season"]),
    )


def _event_from_dict(data: Dict[str, Any]) -> SocialEvent:
    return SocialEvent(
        name=data["name"],
        type=SocialEventType(data.get("type", "holiday")),
        impact=float(data.get("impact", 1.0)),
        start_date=parse_date(data["startDate"]),
        end_date=parse_date(data["endDate"]),
    )


def _economic_from_dict(data: Optional[Dict[str, Any]]) -> Optional[EconomicIndicators]:
    if data is None:
        return None
    currency = data.get("currencyRate", data.get("kenyaShillingRate"))
    if currency is None:
        raise KeyError("currencyRate")
    return EconomicIndicators(
        inflation_rate=float(data["inflationRate"]),
        unemployment_rate=float(data["unemploymentRate"]),
        currency_rate=float(currency),
        fuel_price=float(data["fuelPrice"]),
    )


def forecasting_inputs_from_dict(data: Dict[str, Any]) -> ForecastingInputs:
    """
    Build ForecastingInputs from a decoded JSON payload.

    Raises:
        KeyError: required field missing
        ValueError: field value rejected by the domain models
    """
    location = data["location"]
    events = data.get("socialEvents")

    return ForecastingInputs(
        product_id=str(data["productId"]),
        product_category=str(data["productCategory"]),
        historical_sales=tuple(_sales_record_from_dict(r) for r in data.get("historicalSales", [])),
        location=Location(
            county=str(location["county"]),
            is_urban=_bool_from_json(location["isUrban"], "isUrban"),
            population=int(location.get("population", 0)),
        ),
        weather_data=_weather_from_dict(data.get("weatherData")),
        social_events=tuple(_event_from_dict(e) for e in events) if events is not None else None,
        economic_indicators=_economic_from_dict(data.get("economicIndicators")),
    )


def _prediction_to_dict(p: DemandPrediction) -> Dict[str, Any]:
    return {
        "date": p.date.isoformat(),
        "predictedDemand": round_half_up(p.predicted_demand),
        "confidenceInterval": {
            "low": round_half_up(p.confidence_interval.low),
            "high": round_half_up(p.confidence_interval.high),
        },
        "factors": {
            "baseline": round_half_up(p.factors.baseline),
            "weather": round_half_up(p.factors.weather),
            "seasonal": round_half_up(p.factors.seasonal),
            "events": round_half_up(p.factors.events),
            "economic": round_half_up(p.factors.economic),
        },
    }


def forecast_result_to_dict(result: ForecastResult) -> Dict[str, Any]:
    """Serialize a ForecastResult for display (JSON-compatible)."""
    viz = result.acacia_visualization
    insights = result.insights
    recs = result.recommendations
    risk = result.risk_factors

    return {
        "predictions": [_prediction_to_dict(p) for p in result.predictions],
        "confidence": result.confidence,
        "acaciaVisualization": {
            "treeState": viz.tree_state.value,
            "leafCount": viz.leaf_count,
            "bloomIntensity": viz.bloom_intensity,
            "seasonalPattern": viz.seasonal_pattern,
        },
        "insights": {
            "trend": insights.trend,
            "seasonality": insights.seasonality,
            "keyDrivers": list(insights.key_drivers),
            "kenyaFactors": list(insights.kenya_factors),
        },
        "recommendations": {
            "stockLevels": list(recs.stock_levels),
            "orderTiming": [d.isoformat() for d in recs.order_timing],
            "priceOptimization": list(recs.price_optimization),
            "marketingOpportunities": list(recs.marketing_opportunities),
        },
        "riskFactors": {
            "weatherRisk": risk.weather_risk,
            "economicRisk": risk.economic_risk,
            "competitionRisk": risk.competition_risk,
            "supplyChainRisk": risk.supply_chain_risk,
        },
    }
