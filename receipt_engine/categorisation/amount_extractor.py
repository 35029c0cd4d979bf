"""
Amount extraction from free receipt text.
"""

import logging
import re
from typing import List, Optional, Pattern, Tuple

from .preprocess import parse_amount

logger = logging.getLogger(__name__)

# Thousands grouped by space, no-break space or dot: "6 499,00", "1.234,50"
_GROUPED = r"(?<!\d)\d{1,3}(?:[ .\u00a0]\d{3})+"
_NUMBER = rf"({_GROUPED}(?:[.,]\d{{1,2}})?(?!\d)|\d+(?:[.,]\d{{1,2}})?)"
_LINE_NUMBER = rf"({_GROUPED}[.,]\d{{2}}|\d+[.,]\d{{2}})"

# Tried in this order; the first pattern that yields a parseable figure wins.
AMOUNT_PATTERNS: List[Tuple[str, Pattern]] = [
    ("currency", re.compile(
        rf"(?i){_NUMBER}\s*(?:kr|nok)\b|\b(?:kr|nok)\.?\s*{_NUMBER}"
    )),
    ("trailing_line", re.compile(rf"(?m){_LINE_NUMBER}[ \t\r]*$")),
    ("total_label", re.compile(rf"(?i)\btotal[a-z]*\s*:?\s*{_NUMBER}")),
    ("sum_label", re.compile(rf"(?i)\bsum[a-z]*\s*:?\s*{_NUMBER}")),
]


class AmountExtractor:
    """Reads the receipt total out of OCR/free text."""

    def __init__(self, patterns: Optional[List[Tuple[str, Pattern]]] = None):
        self.patterns = patterns if patterns is not None else AMOUNT_PATTERNS

    def extract(self, text: Optional[str]) -> Optional[float]:
        """
        Extract the total amount from receipt text.

        Args:
            text: Receipt text

        Returns:
            Amount as float, or None when no pattern matched
        """
        amount, _ = self.extract_with_method(text)
        return amount

    def extract_with_method(self, text: Optional[str]) -> Tuple[Optional[float], Optional[str]]:
        """
        Extract the total amount and report which pattern produced it.

        Within a pattern the last occurrence is used, since receipts print
        the total after the line items.

        Returns:
            Tuple of (amount, pattern_name) or (None, None)
        """
        if not text:
            return None, None

        for name, pattern in self.patterns:
            matches = list(pattern.finditer(text))
            for match in reversed(matches):
                raw = next((g for g in match.groups() if g is not None), None)
                if raw is None:
                    continue
                amount = parse_amount(raw)
                if amount is not None:
                    logger.debug("Amount %.2f extracted by %s pattern", amount, name)
                    return amount, name

        return None, None


def extract_amount(text: Optional[str]) -> Optional[float]:
    """Module-level shortcut for AmountExtractor().extract(text)."""
    return AmountExtractor().extract(text)
