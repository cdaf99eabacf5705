"""
Kenyan holiday demand profiles and public-holiday calendar.

Supports:
- Per-holiday demand multipliers by product category, with an optional
  "general" multiplier for categories the holiday does not list
- Fixed-date public holidays (New Year's Day, Mashujaa Day, Christmas)
- Easter weekend (Good Friday to Easter Monday) via the Gregorian computus

Lunar holidays (Ramadan, Eid) move every year and are not computed here;
callers pass them as SocialEvents with the observed dates.
"""
from datetime import date, timedelta
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from .models import SocialEvent, SocialEventType


GENERAL_CATEGORY = "general"


@dataclass(frozen=True)
class HolidayProfile:
    """
    Demand profile of a named holiday.

    Attributes:
        name: Holiday name as it appears in SocialEvent.name
        category: Holiday kind (religious, holiday)
        demand_multipliers: Category -> multiplier; "general" applies to
                            categories not listed
    """
    name: str
    category: SocialEventType
    demand_multipliers: Mapping[str, float]

    def multiplier_for(self, product_category: str) -> Optional[float]:
        """Category multiplier, else the general one, else None."""
        if product_category in self.demand_multipliers:
            return self.demand_multipliers[product_category]
        return self.demand_multipliers.get(GENERAL_CATEGORY)


def _profile(name: str, category: SocialEventType, multipliers: Dict[str, float]) -> HolidayProfile:
    return HolidayProfile(name=name, category=category, demand_multipliers=MappingProxyType(multipliers))


KENYA_HOLIDAYS: Mapping[str, HolidayProfile] = MappingProxyType({
    profile.name: profile
    for profile in (
        _profile("Ramadan", SocialEventType.RELIGIOUS, {"rice": 1.8, "dates": 2.5, "sugar": 1.4}),
        _profile("Christmas", SocialEventType.HOLIDAY, {"flour": 1.6, "cooking_oil": 1.8, "rice": 1.4}),
        _profile("New Year", SocialEventType.HOLIDAY, {"beverages": 2.0, "meat": 1.5}),
        _profile("Easter", SocialEventType.RELIGIOUS, {"flour": 1.3, "sugar": 1.2}),
        _profile("Eid", SocialEventType.RELIGIOUS, {"meat": 2.2, "rice": 1.6, "sugar": 1.3}),
        _profile("Mashujaa Day", SocialEventType.HOLIDAY, {GENERAL_CATEGORY: 1.2}),
    )
})


def find_holiday(name: str) -> Optional[HolidayProfile]:
    """Exact-name lookup in the holiday table."""
    return KENYA_HOLIDAYS.get(name)


def easter_sunday(year: int) -> date:
    """
    Calculate Easter Sunday using the Meeus/Jones/Butcher algorithm (Gregorian).

    Args:
        year: Year to calculate Easter for

    Returns:
        Date of Easter Sunday
    """
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1

    return date(year, month, day)


def kenya_public_holidays(year: int) -> List[SocialEvent]:
    """
    Public holidays of a year that have a demand profile.

    Args:
        year: Calendar year

    Returns:
        SocialEvents sorted by start date
    """
    easter = easter_sunday(year)
    holidays = [
        ("New Year", date(year, 1, 1), date(year, 1, 1)),
        ("Easter", easter - timedelta(days=2), easter + timedelta(days=1)),  # Good Friday - Easter Monday
        ("Mashujaa Day", date(year, 10, 20), date(year, 10, 20)),
        ("Christmas", date(year, 12, 25), date(year, 12, 26)),  # Christmas + Boxing Day
    ]

    events = [
        SocialEvent(
            name=name,
            type=KENYA_HOLIDAYS[name].category,
            impact=1.0,
            start_date=start,
            end_date=end,
        )
        for name, start, end in holidays
    ]
    return sorted(events, key=lambda e: e.start_date)


def public_holiday_events(start_date: date, forecast_days: int) -> List[SocialEvent]:
    """Public-holiday events overlapping the horizon [start_date, start_date + forecast_days)."""
    if forecast_days <= 0:
        return []
    end_date = start_date + timedelta(days=forecast_days - 1)

    events = []
    for year in range(start_date.year, end_date.year + 1):
        for event in kenya_public_holidays(year):
            if event.end_date >= start_date and event.start_date <= end_date:
                events.append(event)
    return events
