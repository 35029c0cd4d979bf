"""
Receipt Engine - Norwegian receipt classification and spend prediction.

Classifies free-text receipts (merchant, MVA rate, seasonal context,
organisational deductibility), learns merchant confidence from user
corrections, and forecasts spend from historical transactions.

Main Components:
    - patterns: Merchant catalog data, food keywords, seasonal tables
    - config: Engine configuration and merchant catalog loader
    - categorisation: Amount extraction, merchant detection, VAT classification
    - seasonal: Date-derived seasonal/cultural context
    - compliance: Organisation-type deduction rules
    - learning: Correction store and fine-tuning simulation
    - analytics: Predictive spend analysis
"""

from datetime import date
from typing import Dict, Optional

# Categorisation components
from .categorisation import (
    AmountExtractor,
    MerchantDetector,
    DetectionResult,
    VatClassifier,
    VatAnalysis,
    calculate_vat_amount,
)

# Seasonal context
from .seasonal import SeasonalContextProvider, SeasonalProfile

# Compliance
from .compliance import ComplianceEvaluator, ComplianceDecision

# Learning
from .learning import (
    LearningStore,
    Correction,
    CorrectionOutcome,
    TrainingExample,
    TrainingMetrics,
    simulate_fine_tuning,
)

# Analytics
from .analytics import (
    HistoricalTransaction,
    SpendPrediction,
    SeasonalInsight,
    BudgetRecommendation,
    PredictiveAnalysisResult,
    PredictiveAnalyzer,
)

# Configuration
from .config import (
    MerchantProfile,
    MerchantCatalog,
    UNKNOWN_MERCHANT,
    load_merchant_catalog,
)

from .errors import InputValidationError, CatalogLoadError
from .pipeline import ReceiptAnalysis, ReceiptAnalysisEngine


__version__ = "0.1.0"
__all__ = [
    # Categorisation
    "AmountExtractor",
    "MerchantDetector",
    "DetectionResult",
    "VatClassifier",
    "VatAnalysis",
    "calculate_vat_amount",
    # Seasonal
    "SeasonalContextProvider",
    "SeasonalProfile",
    # Compliance
    "ComplianceEvaluator",
    "ComplianceDecision",
    # Learning
    "LearningStore",
    "Correction",
    "CorrectionOutcome",
    "TrainingExample",
    "TrainingMetrics",
    "simulate_fine_tuning",
    # Analytics
    "HistoricalTransaction",
    "SpendPrediction",
    "SeasonalInsight",
    "BudgetRecommendation",
    "PredictiveAnalysisResult",
    "PredictiveAnalyzer",
    # Configuration
    "MerchantProfile",
    "MerchantCatalog",
    "UNKNOWN_MERCHANT",
    "load_merchant_catalog",
    # Errors
    "InputValidationError",
    "CatalogLoadError",
    # Pipeline
    "ReceiptAnalysis",
    "ReceiptAnalysisEngine",
    # Main function
    "run_receipt_analysis",
]


def run_receipt_analysis(
    text: str,
    organization_type: str = "",
    current_date: Optional[date] = None,
    engine: Optional[ReceiptAnalysisEngine] = None,
) -> Dict:
    """
    Main entry point for one-off receipt analysis.

    This function runs the complete pipeline:
    1. Extract the receipt total
    2. Detect the merchant (blending learned confidence)
    3. Derive the seasonal context
    4. Classify MVA and evaluate deductibility

    Args:
        text: Receipt text
        organization_type: Organisation the purchase was made for
        current_date: Date driving the seasonal context
        engine: Engine to reuse; a fresh one (with its own learning store) is built when omitted

    Returns:
        Dictionary form of the ReceiptAnalysis

    Example:
        >>> result = run_receipt_analysis(
        ...     "REMA 1000 Oslo Melk 34.90 kr TOTALT 34.90 kr",
        ...     organization_type="association",
        ... )
        >>> result["vat"]["detected_rate"]
        15
    """
    engine = engine or ReceiptAnalysisEngine()
    return engine.classify(text, organization_type, current_date).to_dict()
