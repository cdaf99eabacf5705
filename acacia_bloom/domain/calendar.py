"""
Forecast horizon calendar helpers.

Day 0 of the horizon is the forecast date ("today"); every model indexes
its per-day series by the same offsets.
"""
from datetime import date, timedelta
from typing import List


def horizon_dates(start: date, forecast_days: int) -> List[date]:
    """Consecutive dates start, start+1, ..., start+forecast_days-1."""
    return [start + timedelta(days=i) for i in range(forecast_days)]


def horizon_months(start: date, forecast_days: int) -> List[int]:
    """Calendar month (1-12) of each horizon day."""
    return [d.month for d in horizon_dates(start, forecast_days)]
