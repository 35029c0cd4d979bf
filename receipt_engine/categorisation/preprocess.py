"""
Preprocessing utilities for receipt classification.
Handles text normalization, merchant keys and organisation type families.
"""

import re
from typing import Dict, List, Optional

from ..patterns.merchant_patterns import ORGANIZATION_TYPE_PATTERNS

# "1.234" or "12.345.678": dots grouping thousands, no decimal part
_DOT_GROUPED = re.compile(r"^\d{1,3}(?:\.\d{3})+$")


def normalize_text(text: Optional[str]) -> str:
    """
    Normalize text for matching.

    Args:
        text: Raw receipt text

    Returns:
        Normalized uppercase text
    """
    if not text:
        return ""
    # Convert to uppercase for matching
    return text.upper().strip()


def normalize_merchant_key(merchant_name: Optional[str]) -> str:
    """
    Normalize a merchant name for use as a learning-store key.

    Args:
        merchant_name: Merchant name in any casing/spacing

    Returns:
        Uppercase name with single spaces, "" for empty input
    """
    if not merchant_name:
        return ""
    return " ".join(merchant_name.upper().split())


def parse_amount(raw: str) -> Optional[float]:
    """
    Parse a captured money figure.

    Accepts comma as decimal separator and space, no-break space or dot
    as thousands separator ("6 499,00", "1.234,50", "1.234").

    Args:
        raw: Captured digits, e.g. "63,40"

    Returns:
        Float value or None if it does not parse
    """
    try:
        cleaned = raw.replace(" ", "").replace("\u00a0", "")
    except AttributeError:
        return None

    if "," in cleaned:
        # Comma is the decimal mark, so any dot groups thousands
        cleaned = cleaned.replace(".", "").replace(",", ".")
    elif _DOT_GROUPED.match(cleaned):
        cleaned = cleaned.replace(".", "")

    try:
        return float(cleaned)
    except ValueError:
        return None


def organization_family(
    organization_type: Optional[str],
    families: Dict[str, List[str]] = ORGANIZATION_TYPE_PATTERNS,
) -> str:
    """
    Map a free-typed organisation type onto a rule family.

    Args:
        organization_type: e.g. "Association", "skolekorps", "AS"
        families: Family name -> accepted spellings

    Returns:
        "association", "band", or "other"
    """
    if not organization_type:
        return "other"
    value = organization_type.strip().lower()
    for family, spellings in families.items():
        if value in spellings:
            return family
    return "other"
