"""
Categorisation Module for the Receipt Engine.

Turns raw receipt text into structured facts through:
- Preprocessing (normalization, amount parsing, organisation families)
- Amount extraction (ordered currency/label patterns)
- Merchant detection (catalog keys, aliases, organisation identifiers)
- VAT classification (MVA bracket selection and compliance check)
"""

from .amount_extractor import AmountExtractor, AMOUNT_PATTERNS, extract_amount
from .merchant_detector import MerchantDetector, DetectionResult, blend_confidence
from .vat_classifier import VatClassifier, VatAnalysis, VAT_BRACKETS, calculate_vat_amount
from .preprocess import (
    normalize_text,
    normalize_merchant_key,
    parse_amount,
    organization_family,
)
from .pattern_matching import (
    by_match_priority,
    match_longest_key,
    match_alias,
    match_identifier,
    match_keyword_words,
)

__all__ = [
    # Main components
    "AmountExtractor",
    "AMOUNT_PATTERNS",
    "extract_amount",
    "MerchantDetector",
    "DetectionResult",
    "blend_confidence",
    "VatClassifier",
    "VatAnalysis",
    "VAT_BRACKETS",
    "calculate_vat_amount",
    # Preprocessing utilities
    "normalize_text",
    "normalize_merchant_key",
    "parse_amount",
    "organization_family",
    # Pattern matching utilities
    "by_match_priority",
    "match_longest_key",
    "match_alias",
    "match_identifier",
    "match_keyword_words",
]
