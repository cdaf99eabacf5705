"""
Centralized validation rules for forecast requests.

Each check returns (is_valid, error_message); callers decide whether a
failure is a contract error (raise) or a degraded input (log and skip).
"""
from datetime import date
from typing import Sequence, Tuple

from .models import SalesRecord, SocialEvent


def validate_forecast_days(forecast_days) -> Tuple[bool, str]:
    """
    Validate the forecast horizon.

    Args:
        forecast_days: Requested number of days

    Returns:
        (is_valid, error_message)
    """
    # bool is an int subclass but never a meaningful horizon
    if isinstance(forecast_days, bool) or not isinstance(forecast_days, int):
        return False, f"forecast_days must be an integer, got {type(forecast_days).__name__}"

    if forecast_days <= 0:
        return False, f"forecast_days must be > 0, got {forecast_days}"

    return True, ""


def validate_date_range(start_date: date, end_date: date) -> Tuple[bool, str]:
    """
    Validate date range.

    Args:
        start_date: Start date
        end_date: End date

    Returns:
        (is_valid, error_message)
    """
    if start_date > end_date:
        return False, f"start date {start_date} is after end date {end_date}"

    return True, ""


def validate_event_window(event: SocialEvent) -> Tuple[bool, str]:
    """Check that an event's date range is well formed."""
    is_valid, message = validate_date_range(event.start_date, event.end_date)
    if not is_valid:
        return False, f"Event '{event.name}': {message}"
    return True, ""


def validate_sales_history(records: Sequence[SalesRecord]) -> Tuple[bool, str]:
    """
    Check that a sales history is usable for trend estimation.

    An empty history is valid (the engine falls back to a flat baseline).
    Duplicate dates are reported but not fatal.

    Returns:
        (is_valid, error_message)
    """
    seen = set()
    duplicates = set()
    for record in records:
        if record.date in seen:
            duplicates.add(record.date)
        seen.add(record.date)

    if duplicates:
        first = min(duplicates)
        return False, f"{len(duplicates)} duplicate sales dates (first: {first})"

    return True, ""
