"""
Merchant catalog loader.
Builds the read-only merchant reference table from the built-in patterns
or from a CSV override file.
"""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from rapidfuzz import fuzz, process

from ..errors import CatalogLoadError
from ..patterns.merchant_patterns import MERCHANT_PATTERNS, UNKNOWN_MERCHANT_PATTERN
from .engine_config import DETECTION_CONFIG, VAT_CONFIG

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MerchantProfile:
    """Reference record for a known retailer."""
    name: str
    chain: str
    category: str
    typical_vat_rate: int
    seasonal_products: Tuple[str, ...] = ()
    organization_id_pattern: Optional[str] = None
    base_confidence: float = 0.5
    is_regulated_alcohol: bool = False  # Vinmonopolet and similar


UNKNOWN_MERCHANT = MerchantProfile(
    name=UNKNOWN_MERCHANT_PATTERN["name"],
    chain=UNKNOWN_MERCHANT_PATTERN["chain"],
    category=UNKNOWN_MERCHANT_PATTERN["category"],
    typical_vat_rate=UNKNOWN_MERCHANT_PATTERN["typical_vat_rate"],
    seasonal_products=tuple(UNKNOWN_MERCHANT_PATTERN["seasonal_products"]),
    organization_id_pattern=None,
    base_confidence=UNKNOWN_MERCHANT_PATTERN["base_confidence"],
)


def _normalize_name(name: Optional[str]) -> str:
    if not name:
        return ""
    return " ".join(name.upper().split())


class MerchantCatalog:
    """Read-only mapping from uppercase catalog key to MerchantProfile."""

    def __init__(self, profiles: Mapping[str, MerchantProfile]):
        if not profiles:
            raise CatalogLoadError("Merchant catalog is empty")
        self._profiles = MappingProxyType({key.upper(): profile for key, profile in profiles.items()})

        # Longest key first, then alphabetical, so overlapping keys resolve the same way every time
        self._keys_by_priority = sorted(self._profiles, key=lambda k: (-len(k), k))

        # Names and keys used to resolve free-typed merchant names from corrections
        self._name_lookup: Dict[str, str] = {}
        for key, profile in self._profiles.items():
            self._name_lookup[key] = profile.name
            self._name_lookup[_normalize_name(profile.name)] = profile.name
        self._name_choices = sorted(self._name_lookup)

    def __getitem__(self, key: str) -> MerchantProfile:
        return self._profiles[key.upper()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.upper() in self._profiles

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys_by_priority)

    def __len__(self) -> int:
        return len(self._profiles)

    def get(self, key: str) -> Optional[MerchantProfile]:
        return self._profiles.get(key.upper())

    def items(self) -> List[Tuple[str, MerchantProfile]]:
        return [(key, self._profiles[key]) for key in self._keys_by_priority]

    def keys_by_priority(self) -> List[str]:
        """Catalog keys ordered longest first, ties broken alphabetically."""
        return list(self._keys_by_priority)

    def resolve_name(self, name: str) -> str:
        """
        Map a user-typed merchant name onto the canonical catalog name.

        Exact key/name matches win; otherwise the closest catalog name is
        accepted if its rapidfuzz WRatio clears the configured cutoff.

        Args:
            name: Merchant name as typed in a correction

        Returns:
            Canonical profile name, or the normalized input if nothing is close enough

        Example:
            >>> catalog.resolve_name("Rema1000")
            'REMA 1000'
        """
        normalized = _normalize_name(name)
        if not normalized:
            return normalized

        if normalized in self._name_lookup:
            return self._name_lookup[normalized]

        best = process.extractOne(
            normalized,
            self._name_choices,
            scorer=fuzz.WRatio,
            score_cutoff=DETECTION_CONFIG["name_match_score_cutoff"],
        )
        if best is None:
            return normalized

        choice, score, _ = best
        logger.debug("Resolved merchant name %r to %r (score %.1f)", name, self._name_lookup[choice], score)
        return self._name_lookup[choice]


def _build_profile(key: str, info: Dict) -> MerchantProfile:
    brackets = set(VAT_CONFIG["brackets"].values())
    rate = int(info["typical_vat_rate"])
    if rate not in brackets:
        raise CatalogLoadError(f"Merchant {key}: VAT rate {rate} is not one of {sorted(brackets)}")

    confidence = float(info["base_confidence"])
    if not 0.0 <= confidence <= 1.0:
        raise CatalogLoadError(f"Merchant {key}: base confidence {confidence} outside [0, 1]")

    return MerchantProfile(
        name=info["name"],
        chain=info.get("chain", ""),
        category=info["category"],
        typical_vat_rate=rate,
        seasonal_products=tuple(info.get("seasonal_products") or ()),
        organization_id_pattern=info.get("organization_id_pattern") or None,
        base_confidence=confidence,
        is_regulated_alcohol=bool(info.get("is_regulated_alcohol", False)),
    )


def load_merchant_catalog_csv(csv_path: str) -> Dict[str, Dict]:
    """
    Load merchant patterns from a CSV file.

    Args:
        csv_path: Path to CSV file containing merchant rows

    Returns:
        Dictionary in the MERCHANT_PATTERNS format

    Example CSV format:
        key,name,chain,category,typical_vat_rate,seasonal_products,organization_id_pattern,base_confidence,is_regulated_alcohol
        REMA,REMA 1000,Reitangruppen,grocery,15,grillmat;is,,0.95,false
    """
    csv_file = Path(csv_path)
    if not csv_file.exists():
        raise FileNotFoundError(f"Merchant catalog file not found: {csv_path}")

    patterns = {}
    with open(csv_file, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(f)
        for row in reader:
            key = (row.get('key') or '').strip().upper()
            if not key:
                continue
            products = [p.strip() for p in (row.get('seasonal_products') or '').split(';') if p.strip()]
            patterns[key] = {
                'name': (row.get('name') or '').strip(),
                'chain': (row.get('chain') or '').strip(),
                'category': (row.get('category') or '').strip(),
                'typical_vat_rate': (row.get('typical_vat_rate') or '').strip(),
                'seasonal_products': products,
                'organization_id_pattern': (row.get('organization_id_pattern') or '').strip() or None,
                'base_confidence': (row.get('base_confidence') or '').strip(),
                'is_regulated_alcohol': (row.get('is_regulated_alcohol') or '').strip().lower() in ('1', 'true', 'yes'),
            }
    return patterns


def load_merchant_catalog(csv_path: Optional[str] = None) -> MerchantCatalog:
    """
    Build the merchant catalog.

    Args:
        csv_path: Optional CSV override; the built-in MERCHANT_PATTERNS are used when omitted

    Returns:
        MerchantCatalog

    Raises:
        FileNotFoundError: If csv_path does not exist
        CatalogLoadError: If any row is malformed or the catalog is empty
    """
    patterns = load_merchant_catalog_csv(csv_path) if csv_path else MERCHANT_PATTERNS

    profiles = {}
    for key, info in patterns.items():
        try:
            profiles[key] = _build_profile(key, info)
        except (KeyError, TypeError, ValueError) as e:
            raise CatalogLoadError(f"Invalid merchant entry {key}: {e}") from e

    catalog = MerchantCatalog(profiles)
    logger.debug("Loaded merchant catalog with %d merchants", len(catalog))
    return catalog
