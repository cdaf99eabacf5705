"""
Event impact model: date-ranged multiplicative overlays.

Methodology:
1. For each event, find the horizon days inside [start_date, end_date]
2. Resolve the multiplier:
   - known holiday listing the product category → that multiplier
   - known holiday with a "general" multiplier → general multiplier
   - otherwise → the event's own impact
3. Overlapping events compose multiplicatively on the same day
4. Days without events keep the neutral 1.0

Design Invariants:
- Deterministic: dates come from the caller, never from datetime.now()
- Robust: inverted date ranges are skipped with a warning, never raise
"""

from datetime import date
from typing import Iterable, List, Sequence
import logging

from .calendar import horizon_dates
from .holidays import find_holiday
from .models import SocialEvent
from .validation import validate_event_window

logger = logging.getLogger(__name__)


def resolve_event_multiplier(event: SocialEvent, product_category: str) -> float:
    """Multiplier an event applies to a category on the days it covers."""
    holiday = find_holiday(event.name)
    if holiday is not None:
        multiplier = holiday.multiplier_for(product_category)
        if multiplier is not None:
            return multiplier
    return event.impact


def merge_calendar_events(
    caller_events: Sequence[SocialEvent],
    calendar_events: Iterable[SocialEvent],
) -> List[SocialEvent]:
    """
    Add calendar-generated events to the caller's events.

    A calendar event is dropped when a caller event with the same name
    overlaps it, so the same holiday is never counted twice.
    """
    merged = list(caller_events)
    for candidate in calendar_events:
        duplicate = any(
            e.name == candidate.name
            and e.is_valid_range
            and e.start_date <= candidate.end_date
            and candidate.start_date <= e.end_date
            for e in caller_events
        )
        if duplicate:
            logger.debug(f"Skipping calendar event '{candidate.name}' ({candidate.start_date}): supplied by caller")
            continue
        merged.append(candidate)
    return merged


def calculate_events_impact(
    events: Sequence[SocialEvent],
    product_category: str,
    forecast_days: int,
    start_date: date,
) -> List[float]:
    """
    Event multiplier per forecast day.

    Args:
        events: Social events (may be empty)
        product_category: Category key
        forecast_days: Horizon length
        start_date: Day 0 of the horizon

    Returns:
        List of forecast_days multipliers
    """
    impact = [1.0] * forecast_days
    days = horizon_dates(start_date, forecast_days)

    for event in events:
        is_valid, message = validate_event_window(event)
        if not is_valid:
            logger.warning(f"Ignoring event with invalid window: {message}")
            continue

        multiplier = resolve_event_multiplier(event, product_category)
        for i, day in enumerate(days):
            if event.covers(day):
                impact[i] *= multiplier

    return impact
