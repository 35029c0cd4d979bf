"""
MVA (VAT) classification for Norwegian receipts.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..config.catalog_loader import MerchantProfile
from ..config.engine_config import VAT_CONFIG
from ..patterns.merchant_patterns import FOOD_KEYWORDS
from .pattern_matching import match_keyword_words
from .preprocess import normalize_text

logger = logging.getLogger(__name__)

VAT_BRACKETS = frozenset(VAT_CONFIG["brackets"].values())


@dataclass
class VatAnalysis:
    """Result of VAT classification."""
    detected_rate: int
    explanation: str
    vat_amount: float
    compliance_status: str


def calculate_vat_amount(amount: float, rate: int) -> float:
    """
    VAT contained in a gross (VAT-inclusive) amount.

    Args:
        amount: Gross amount in NOK
        rate: MVA rate in percent, one of VAT_BRACKETS

    Returns:
        amount * rate / (100 + rate), rounded to øre
    """
    if rate not in VAT_BRACKETS:
        raise ValueError(f"VAT rate {rate} is not one of {sorted(VAT_BRACKETS)}")
    return round(amount * rate / (100 + rate), 2)


class VatClassifier:
    """Selects the MVA bracket for a purchase and checks it against the merchant."""

    def __init__(self, food_keywords: Optional[List[str]] = None):
        self.brackets = VAT_CONFIG["brackets"]
        self.grocery_categories = set(VAT_CONFIG["grocery_categories"])
        self.food_keywords = food_keywords if food_keywords is not None else FOOD_KEYWORDS

    def classify(self, amount: float, merchant: MerchantProfile, free_text: Optional[str] = "") -> VatAnalysis:
        """
        Classify the VAT rate for a purchase.

        Args:
            amount: Gross amount in NOK
            merchant: Detected merchant profile
            free_text: Receipt text, scanned for food words

        Returns:
            VatAnalysis with rate, VAT amount and compliance status
        """
        text = normalize_text(free_text)

        if merchant.is_regulated_alcohol:
            rate = self.brackets["standard"]
            explanation = (
                f"Standard rate {rate}% for alcohol sold by {merchant.name}; "
                "alcohol excise duty is not included in this analysis"
            )
        else:
            food_word = match_keyword_words(text, self.food_keywords)
            if food_word or merchant.category in self.grocery_categories:
                rate = self.brackets["reduced"]
                reason = f"food item '{food_word.lower()}'" if food_word else f"{merchant.category} merchant"
                explanation = f"Reduced food rate {rate}% ({reason})"
            else:
                rate = self.brackets["standard"]
                explanation = f"Standard rate {rate}% for {merchant.category} purchases"

        vat_amount = calculate_vat_amount(amount, rate)

        if rate == merchant.typical_vat_rate:
            compliance_status = "compliant"
        else:
            compliance_status = (
                f"Rate mismatch: {merchant.name} normally charges {merchant.typical_vat_rate}%, "
                f"receipt classified at {rate}%"
            )

        logger.debug("VAT %d%% on %.2f = %.2f (%s)", rate, amount, vat_amount, compliance_status)
        return VatAnalysis(
            detected_rate=rate,
            explanation=explanation,
            vat_amount=vat_amount,
            compliance_status=compliance_status,
        )
