"""
Configuration module for the Receipt Engine.

This module contains the configuration dictionaries for detection, VAT,
compliance, prediction and learning, and the merchant catalog loader.
"""

from .engine_config import (
    DETECTION_CONFIG,
    AMOUNT_CONFIG,
    VAT_CONFIG,
    COMPLIANCE_CONFIG,
    PREDICTION_CONFIG,
    LEARNING_CONFIG,
    TRAINING_CONFIG,
    SERVICE_CONFIG,
)
from .catalog_loader import (
    MerchantProfile,
    MerchantCatalog,
    UNKNOWN_MERCHANT,
    load_merchant_catalog,
    load_merchant_catalog_csv,
)

__all__ = [
    "DETECTION_CONFIG",
    "AMOUNT_CONFIG",
    "VAT_CONFIG",
    "COMPLIANCE_CONFIG",
    "PREDICTION_CONFIG",
    "LEARNING_CONFIG",
    "TRAINING_CONFIG",
    "SERVICE_CONFIG",
    "MerchantProfile",
    "MerchantCatalog",
    "UNKNOWN_MERCHANT",
    "load_merchant_catalog",
    "load_merchant_catalog_csv",
]
