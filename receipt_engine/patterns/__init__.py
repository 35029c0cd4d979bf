"""
Reference Pattern Definitions for the Receipt Engine.

Contains the static lookup tables used for classification:
- Merchant catalog fingerprints and multi-word aliases
- Food keywords for the reduced MVA bracket
- Organisation type spellings for the compliance rules
- Seasonal profiles and cultural event catalog
"""

from .merchant_patterns import (
    MERCHANT_PATTERNS,
    MERCHANT_ALIASES,
    UNKNOWN_MERCHANT_PATTERN,
    FOOD_KEYWORDS,
    ORGANIZATION_TYPE_PATTERNS,
)
from .seasonal_patterns import SEASONAL_PROFILES, SEASONAL_EVENTS

__all__ = [
    "MERCHANT_PATTERNS",
    "MERCHANT_ALIASES",
    "UNKNOWN_MERCHANT_PATTERN",
    "FOOD_KEYWORDS",
    "ORGANIZATION_TYPE_PATTERNS",
    "SEASONAL_PROFILES",
    "SEASONAL_EVENTS",
]
