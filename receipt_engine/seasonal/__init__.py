"""
Seasonal Context Module for the Receipt Engine.

Derives the cultural/seasonal purchasing profile from a calendar date.
"""

from .seasonal_context import SeasonalContextProvider, SeasonalProfile

__all__ = [
    "SeasonalContextProvider",
    "SeasonalProfile",
]
