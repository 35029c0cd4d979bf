"""
Merchant detection for receipt text.
Matches text against the merchant catalog and blends the catalog confidence
with confidence learned from user corrections.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from ..config.catalog_loader import MerchantCatalog, MerchantProfile, UNKNOWN_MERCHANT
from ..config.engine_config import DETECTION_CONFIG
from ..patterns.merchant_patterns import MERCHANT_ALIASES
from .pattern_matching import match_alias, match_identifier, match_longest_key
from .preprocess import normalize_text

logger = logging.getLogger(__name__)


@dataclass
class DetectionResult:
    """Result of merchant detection."""
    profile: MerchantProfile
    effective_confidence: float
    matched_key: Optional[str] = None
    match_method: str = "none"  # 'catalog', 'alias', 'organization_id', 'fallback'


def blend_confidence(base_confidence: float, adjustment: float) -> float:
    """Average catalog and learned confidence, clamped to the configured range."""
    blended = (base_confidence + adjustment) / 2
    return max(DETECTION_CONFIG["min_confidence"], min(DETECTION_CONFIG["max_confidence"], blended))


class MerchantDetector:
    """Detects the merchant a receipt was issued by."""

    def __init__(self, catalog: MerchantCatalog, aliases: Optional[Dict[str, str]] = None):
        """Initialize the detector.

        Args:
            catalog: Merchant catalog to match against
            aliases: Multi-word alias phrases -> catalog key (defaults to MERCHANT_ALIASES)
        """
        self.catalog = catalog
        self.aliases = {
            phrase.upper(): key for phrase, key in (aliases if aliases is not None else MERCHANT_ALIASES).items()
            if key in catalog
        }
        self.identifiers = {
            profile.organization_id_pattern: key
            for key, profile in catalog.items()
            if profile.organization_id_pattern
        }
        self._keys = catalog.keys_by_priority()
        self.default_adjustment = DETECTION_CONFIG["default_adjustment"]

    def detect(self, text: Optional[str], learned=None) -> Optional[DetectionResult]:
        """
        Detect the merchant in receipt text.

        Matching order: catalog keys (longest, then alphabetical), multi-word
        aliases, organisation identifiers.

        Args:
            text: Receipt text
            learned: Object exposing adjustment_for(merchant_name), normally a LearningStore

        Returns:
            DetectionResult or None when nothing matched
        """
        normalized = normalize_text(text)
        if not normalized:
            return None

        key = match_longest_key(normalized, self._keys)
        method = "catalog"

        if key is None:
            alias = match_alias(normalized, self.aliases)
            if alias is not None:
                key = alias[1]
                method = "alias"

        if key is None:
            key = match_identifier(normalized, self.identifiers)
            method = "organization_id"

        if key is None:
            logger.debug("No merchant matched")
            return None

        profile = self.catalog[key]
        adjustment = learned.adjustment_for(profile.name) if learned is not None else self.default_adjustment
        confidence = blend_confidence(profile.base_confidence, adjustment)

        logger.debug("Matched merchant %s via %s (confidence %.3f)", profile.name, method, confidence)
        return DetectionResult(
            profile=profile,
            effective_confidence=confidence,
            matched_key=key,
            match_method=method,
        )

    def detect_or_unknown(self, text: Optional[str], learned=None) -> DetectionResult:
        """Detect the merchant, falling back to the unknown-merchant profile."""
        result = self.detect(text, learned)
        if result is not None:
            return result
        return DetectionResult(
            profile=UNKNOWN_MERCHANT,
            effective_confidence=UNKNOWN_MERCHANT.base_confidence,
            matched_key=None,
            match_method="fallback",
        )
