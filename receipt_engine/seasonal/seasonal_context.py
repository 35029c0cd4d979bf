"""
Seasonal context for the Norwegian calendar.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from ..patterns.seasonal_patterns import SEASONAL_PROFILES


@dataclass
class SeasonalProfile:
    """Purchasing context for a calendar date."""
    season_label: str
    cultural_event: Optional[str] = None
    typical_purchases: List[str] = field(default_factory=list)
    price_expectation: str = ""


class SeasonalContextProvider:
    """Maps a date to exactly one seasonal profile."""

    def __init__(self, profiles: Optional[Dict[str, Dict]] = None):
        self.profiles = profiles if profiles is not None else SEASONAL_PROFILES

    def profile_key(self, when: date) -> str:
        if when.month == 5 and when.day == 17:
            return "national_day"
        if when.month == 12:
            return "christmas"
        if when.month in (3, 4):
            return "easter"
        if when.month in (6, 7, 8):
            return "summer"
        if when.month == 9:
            return "back_to_school"
        return "standard"

    def context_for(self, when: date) -> SeasonalProfile:
        """Return the seasonal profile for a date (datetime values are accepted)."""
        info = self.profiles[self.profile_key(when)]
        return SeasonalProfile(
            season_label=info["season_label"],
            cultural_event=info.get("cultural_event"),
            typical_purchases=list(info.get("typical_purchases", [])),
            price_expectation=info.get("price_expectation", ""),
        )
