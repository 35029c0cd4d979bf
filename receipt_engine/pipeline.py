"""
Receipt analysis pipeline.

Composes amount extraction, merchant detection, seasonal context, VAT
classification and compliance evaluation into one analysis, and exposes
the correction and prediction operations the transport layer calls.
"""

import dataclasses
import logging
import time
from dataclasses import asdict, dataclass
from datetime import date
from typing import Callable, Dict, Iterable, Optional, Union

from .analytics.predictive_analyzer import HistoricalTransaction, PredictiveAnalysisResult, PredictiveAnalyzer
from .categorisation.amount_extractor import AmountExtractor
from .categorisation.merchant_detector import DetectionResult, MerchantDetector
from .categorisation.vat_classifier import VatAnalysis, VatClassifier
from .compliance.compliance_evaluator import ComplianceDecision, ComplianceEvaluator
from .config.catalog_loader import MerchantCatalog, load_merchant_catalog
from .config.engine_config import AMOUNT_CONFIG, SERVICE_CONFIG
from .errors import InputValidationError
from .learning.learning_store import Correction, CorrectionOutcome, LearningStore
from .learning.training import TrainingMetrics, simulate_fine_tuning
from .seasonal.seasonal_context import SeasonalContextProvider, SeasonalProfile

logger = logging.getLogger(__name__)


@dataclass
class ReceiptAnalysis:
    """Complete structured analysis of one receipt."""
    detection: DetectionResult
    amount: float
    amount_source: str  # 'extracted' or 'default'
    vat: VatAnalysis
    seasonal: SeasonalProfile
    compliance: ComplianceDecision
    summary: str

    @property
    def merchant_name(self) -> str:
        return self.detection.profile.name

    def to_dict(self) -> Dict:
        return asdict(self)


class ReceiptAnalysisEngine:
    """Entry point for classification, corrections and spend prediction."""

    def __init__(
        self,
        catalog: Optional[MerchantCatalog] = None,
        learning_store: Optional[LearningStore] = None,
    ):
        """
        Initialize the engine.

        Args:
            catalog: Merchant catalog; the built-in catalog is loaded when omitted
            learning_store: Shared correction store; a private store is created when omitted
        """
        self.catalog = catalog if catalog is not None else load_merchant_catalog()
        self.learning_store = learning_store if learning_store is not None else LearningStore()

        self.amount_extractor = AmountExtractor()
        self.merchant_detector = MerchantDetector(self.catalog)
        self.seasonal_provider = SeasonalContextProvider()
        self.vat_classifier = VatClassifier()
        self.compliance_evaluator = ComplianceEvaluator()
        self.predictive_analyzer = PredictiveAnalyzer()

        self.default_amount = AMOUNT_CONFIG["default_amount"]
        self._started = time.monotonic()

    def classify(
        self,
        text: str,
        organization_type: str = "",
        current_date: Optional[date] = None,
    ) -> ReceiptAnalysis:
        """
        Analyze receipt text.

        Args:
            text: Plain receipt text (typed or from OCR)
            organization_type: Organisation the purchase was made for
            current_date: Date driving the seasonal context (today when omitted)

        Returns:
            ReceiptAnalysis

        Raises:
            InputValidationError: If text is empty
        """
        if not text or not text.strip():
            raise InputValidationError("Receipt text is required")

        amount = self.amount_extractor.extract(text)
        amount_source = "extracted"
        if amount is None:
            amount = self.default_amount
            amount_source = "default"
            logger.debug("No amount found in receipt text, using default %.2f", amount)

        detection = self.merchant_detector.detect_or_unknown(text, self.learning_store)
        merchant = detection.profile

        seasonal = self.seasonal_provider.context_for(current_date or date.today())
        vat = self.vat_classifier.classify(amount, merchant, text)
        compliance = self.compliance_evaluator.evaluate(organization_type, merchant, amount)

        return ReceiptAnalysis(
            detection=detection,
            amount=amount,
            amount_source=amount_source,
            vat=vat,
            seasonal=seasonal,
            compliance=compliance,
            summary=self._summarize(merchant.name, amount, vat, seasonal, compliance),
        )

    def classify_document(
        self,
        blob: bytes,
        extract_text: Callable[[bytes], str],
        organization_type: str = "",
        current_date: Optional[date] = None,
    ) -> ReceiptAnalysis:
        """
        Run the OCR collaborator on an uploaded document, then classify the text.

        Args:
            blob: Raw document/image bytes
            extract_text: OCR function returning plain text
            organization_type: Organisation the purchase was made for
            current_date: Date driving the seasonal context

        Raises:
            InputValidationError: If the document is empty or yields no text
        """
        if not blob:
            raise InputValidationError("Document or image content is required")
        return self.classify(extract_text(blob), organization_type, current_date)

    def submit_correction(self, correction: Union[Correction, Dict]) -> CorrectionOutcome:
        """
        Record user feedback so later detections of the merchant adjust their confidence.

        The corrected merchant name is mapped onto the catalog name first.
        """
        if not isinstance(correction, Correction):
            correction = Correction.from_dict(correction)

        if correction.corrected_merchant:
            resolved = self.catalog.resolve_name(correction.corrected_merchant)
            if resolved != correction.corrected_merchant:
                correction = dataclasses.replace(correction, corrected_merchant=resolved)

        return self.learning_store.apply(correction)

    def predict(
        self,
        transactions: Iterable[Union[HistoricalTransaction, Dict]],
        organization_type: str = "",
        timeframe: str = "next_month",
        analysis_type: Optional[str] = None,
    ) -> PredictiveAnalysisResult:
        """Forecast spend from historical transactions. Empty input raises InputValidationError."""
        return self.predictive_analyzer.analyze(transactions, organization_type, timeframe, analysis_type)

    def fine_tune(self, epochs: int = 3, learning_rate: Optional[float] = None) -> TrainingMetrics:
        """Run the fine-tuning simulation over the collected training examples."""
        return simulate_fine_tuning(self.learning_store.training_examples(), epochs, learning_rate)

    def service_info(self) -> Dict:
        return {
            "status": "healthy",
            "service": SERVICE_CONFIG["service"],
            "version": SERVICE_CONFIG["version"],
            "uptime_seconds": int(time.monotonic() - self._started),
            "merchants": len(self.catalog),
            "learning": self.learning_store.stats(),
        }

    def _summarize(
        self,
        merchant_name: str,
        amount: float,
        vat: VatAnalysis,
        seasonal: SeasonalProfile,
        compliance: ComplianceDecision,
    ) -> str:
        parts = [
            f"{merchant_name}: {amount:.2f} NOK incl. {vat.detected_rate}% MVA ({vat.vat_amount:.2f} NOK).",
        ]
        if seasonal.cultural_event:
            parts.append(f"Purchased during {seasonal.cultural_event}.")
        parts.append(f"{compliance.deductibility_verdict}.")
        if compliance.approval_required:
            parts.append("Board approval required.")
        return " ".join(parts)
