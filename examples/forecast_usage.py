"""
Example: Acacia Bloom Forecasting Usage

Demonstrates:
1. Basic forecast from in-memory inputs
2. Short history fallback
3. Holiday overlay with the public-holiday calendar
4. Batch forecasting across products
"""

from datetime import date, timedelta

from acacia_bloom import (
    AcaciaBloomEngine,
    EconomicIndicators,
    ForecastingInputs,
    Location,
    SalesRecord,
    Season,
    SocialEvent,
    SocialEventType,
    WeatherData,
    generate_forecast,
)
from acacia_bloom.workflows import run_batch_forecast


TODAY = date(2026, 7, 1)


def _history(days=28, start=TODAY - timedelta(days=28)):
    """Four weeks of sales with busier weekends."""
    history = []
    for i in range(days):
        d = start + timedelta(days=i)
        qty = 60.0 if d.weekday() >= 5 else 40.0
        history.append(SalesRecord(date=d, quantity=qty, price=180.0, location="Nakuru"))
    return history


def basic_forecast_example():
    """Maize flour in Nakuru during the dry-season shortage."""
    print("=" * 60)
    print("BASIC FORECAST EXAMPLE")
    print("=" * 60)

    inputs = ForecastingInputs(
        product_id="MAIZE-2KG",
        product_category="maize",
        historical_sales=_history(),
        location=Location(county="Nakuru", is_urban=False, population=570000),
        weather_data=WeatherData(temperature=27.0, rainfall=1.0, humidity=40.0, season=Season.DRY),
        economic_indicators=EconomicIndicators(
            inflation_rate=0.068, unemployment_rate=0.12, currency_rate=129.0, fuel_price=178.0,
        ),
    )

    result = generate_forecast(inputs, forecast_days=14, today=TODAY)

    print(f"\nConfidence: {result.confidence}")
    print(f"Tree: {result.acacia_visualization.tree_state.value} "
          f"({result.acacia_visualization.leaf_count} leaves)")
    print(f"Drivers: {', '.join(result.insights.key_drivers)}")
    print("\nFirst week:")
    for p in result.predictions[:7]:
        print(f"  {p.date} {p.predicted_demand:7.1f} "
              f"[{p.confidence_interval.low:6.1f} - {p.confidence_interval.high:6.1f}] "
              f"seasonal {p.factors.seasonal:+.0f}%")


def short_history_example():
    """Only three days of sales: flat baseline, low confidence."""
    print("\n\n" + "=" * 60)
    print("SHORT HISTORY EXAMPLE")
    print("=" * 60)

    inputs = ForecastingInputs(
        product_id="RICE-NEW",
        product_category="rice",
        historical_sales=_history(days=3, start=TODAY - timedelta(days=3)),
        location=Location(county="Kisumu", is_urban=True),
    )

    result = generate_forecast(inputs, forecast_days=7, today=TODAY)
    print(f"\nConfidence: {result.confidence} (trend: {result.insights.trend})")


def holiday_example():
    """Christmas flour demand with the built-in public-holiday calendar."""
    print("\n\n" + "=" * 60)
    print("HOLIDAY EXAMPLE")
    print("=" * 60)

    engine = AcaciaBloomEngine({"events": {"include_public_holidays": True}})
    inputs = ForecastingInputs(
        product_id="FLOUR-2KG",
        product_category="flour",
        historical_sales=_history(start=date(2026, 11, 20)),
        location=Location(county="Nairobi", is_urban=True, population=4400000),
        social_events=[
            SocialEvent("Back to School", SocialEventType.SCHOOL, 1.2, date(2027, 1, 4), date(2027, 1, 8)),
        ],
    )

    result = engine.generate_forecast(inputs, forecast_days=14, today=date(2026, 12, 20))
    for p in result.predictions:
        if p.factors.events:
            print(f"  {p.date}: events {p.factors.events:+.0f}%")
    print(f"Order dates: {[d.isoformat() for d in result.recommendations.order_timing]}")


def batch_example():
    """Forecast several categories in parallel."""
    print("\n\n" + "=" * 60)
    print("BATCH EXAMPLE")
    print("=" * 60)

    batch = [
        ForecastingInputs(
            product_id=f"SKU-{category.upper()}",
            product_category=category,
            historical_sales=_history(),
            location=Location(county="Mombasa", is_urban=True),
        )
        for category in ("maize", "rice", "vegetables", "beverages")
    ]

    report = run_batch_forecast(batch, forecast_days=30, today=TODAY, n_workers=2)
    for product_id, result in sorted(report.results.items()):
        total = sum(result.demand_series())
        print(f"  {product_id:16s} 30-day demand {total:8.0f}  confidence {result.confidence}")


if __name__ == "__main__":
    basic_forecast_example()
    short_history_example()
    holiday_example()
    batch_example()
