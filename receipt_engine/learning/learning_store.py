"""
Learning store for user corrections.

Keeps the append-only correction log, the per-merchant confidence
adjustments derived from it, and a bounded buffer of training examples.
All state sits behind one lock; every public operation is a single
critical section and nothing inside it blocks on I/O.
"""

import logging
import threading
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from ..config.engine_config import DETECTION_CONFIG, LEARNING_CONFIG
from ..categorisation.preprocess import normalize_merchant_key
from ..errors import InputValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Correction:
    """User feedback on a previous analysis. Never mutated once created."""
    original_text: str
    corrected_merchant: Optional[str] = None
    corrected_amount: Optional[float] = None
    corrected_vat_rate: Optional[int] = None
    corrected_category: Optional[str] = None
    feedback: str = ""
    confidence_rating: int = 5  # 1-10
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if isinstance(self.confidence_rating, bool) or not isinstance(self.confidence_rating, int):
            raise InputValidationError(f"confidence_rating must be an integer, got {self.confidence_rating!r}")
        if not 1 <= self.confidence_rating <= 10:
            raise InputValidationError(f"confidence_rating must be between 1 and 10, got {self.confidence_rating}")

    @classmethod
    def from_dict(cls, data: Dict) -> "Correction":
        """Build a correction from a transport-layer JSON payload."""
        rating = data.get("confidence_rating", 5)
        if isinstance(rating, float) and not rating.is_integer():
            raise InputValidationError(f"confidence_rating must be a whole number, got {rating!r}")
        try:
            rating = int(rating)
        except (TypeError, ValueError):
            raise InputValidationError(f"confidence_rating must be an integer, got {rating!r}")
        return cls(
            original_text=data.get("original_text") or data.get("original_analysis") or "",
            corrected_merchant=data.get("corrected_merchant") or None,
            corrected_amount=data.get("corrected_amount"),
            corrected_vat_rate=data.get("corrected_vat_rate"),
            corrected_category=data.get("corrected_category") or None,
            feedback=data.get("feedback") or data.get("user_feedback") or "",
            confidence_rating=rating,
        )


@dataclass(frozen=True)
class TrainingExample:
    """Labelled example derived from a correction."""
    input_text: str
    merchant: Optional[str] = None
    category: Optional[str] = None
    vat_rate: Optional[int] = None
    amount: Optional[float] = None
    weight: float = 0.5


@dataclass
class CorrectionOutcome:
    """Result of applying a correction."""
    applied: bool
    confidence_improvement: Optional[float] = None
    similar_cases_updated: int = 0


class LearningStore:
    """Thread-safe store of corrections and learned merchant adjustments."""

    def __init__(
        self,
        lock_timeout: Optional[float] = None,
        max_corrections: Optional[int] = None,
        correction_eviction_batch: Optional[int] = None,
        max_training_examples: Optional[int] = None,
        training_eviction_batch: Optional[int] = None,
    ):
        """
        Initialize the store.

        Args:
            lock_timeout: Seconds to wait for the lock before a submit is reported as not applied
            max_corrections: Cap on the correction log; None keeps every correction
            correction_eviction_batch: Oldest corrections dropped at once when the cap is exceeded
            max_training_examples: Cap on the training buffer
            training_eviction_batch: Oldest training examples dropped at once when the cap is exceeded
        """
        config = LEARNING_CONFIG
        self.lock_timeout = lock_timeout if lock_timeout is not None else config["lock_timeout_seconds"]
        self.max_corrections = max_corrections if max_corrections is not None else config["max_corrections"]
        self.correction_eviction_batch = max(1, correction_eviction_batch or config["correction_eviction_batch"])
        self.max_training_examples = max_training_examples or config["max_training_examples"]
        self.training_eviction_batch = max(1, training_eviction_batch or config["training_eviction_batch"])

        self.increase_step = config["increase_step"]
        self.decrease_step = config["decrease_step"]
        self.high_rating_threshold = config["high_rating_threshold"]
        self.min_adjustment = config["min_adjustment"]
        self.max_adjustment = config["max_adjustment"]
        self.default_adjustment = DETECTION_CONFIG["default_adjustment"]

        self._lock = threading.Lock()
        self._corrections: List[Correction] = []
        self._merchant_counts: Counter = Counter()
        self._adjustments: Dict[str, float] = {}
        self._training_examples: List[TrainingExample] = []

    def submit(self, correction: Correction) -> bool:
        """
        Record a correction.

        Returns:
            False only when the store lock could not be acquired in time.
            The caller may retry.
        """
        return self.apply(correction).applied

    def apply(self, correction: Correction) -> CorrectionOutcome:
        """
        Record a correction and update the corrected merchant's adjustment.

        The adjustment read, nudge and write happen under one lock hold.

        Args:
            correction: Correction to append

        Returns:
            CorrectionOutcome with the adjustment delta and number of prior
            corrections for the same merchant
        """
        if not self._lock.acquire(timeout=self.lock_timeout):
            logger.warning(
                "Learning store busy for %.1fs; correction for %r not applied",
                self.lock_timeout, correction.corrected_merchant,
            )
            return CorrectionOutcome(applied=False)

        try:
            key = normalize_merchant_key(correction.corrected_merchant)
            similar_cases = self._merchant_counts[key] if key else 0
            improvement = None

            self._corrections.append(correction)
            if key:
                before = self._adjustments.get(key, self.default_adjustment)
                after = self._nudge(before, correction.confidence_rating)
                self._adjustments[key] = after
                self._merchant_counts[key] += 1
                improvement = round(after - before, 4)
            self._evict_corrections()

            self._training_examples.append(TrainingExample(
                input_text=correction.original_text,
                merchant=correction.corrected_merchant,
                category=correction.corrected_category,
                vat_rate=correction.corrected_vat_rate,
                amount=correction.corrected_amount,
                weight=correction.confidence_rating / 10,
            ))
            self._evict_training_examples()
        finally:
            self._lock.release()

        logger.info(
            "Correction applied for %s (rating %d, improvement %s, %d similar cases)",
            key or "no merchant", correction.confidence_rating, improvement, similar_cases,
        )
        return CorrectionOutcome(
            applied=True,
            confidence_improvement=improvement,
            similar_cases_updated=similar_cases,
        )

    def _nudge(self, current: float, rating: int) -> float:
        if rating > self.high_rating_threshold:
            return min(self.max_adjustment, round(current + self.increase_step, 4))
        return max(self.min_adjustment, round(current - self.decrease_step, 4))

    def _evict_corrections(self):
        if self.max_corrections is None or len(self._corrections) <= self.max_corrections:
            return
        evicted = self._corrections[:self.correction_eviction_batch]
        del self._corrections[:self.correction_eviction_batch]
        for old in evicted:
            key = normalize_merchant_key(old.corrected_merchant)
            if key:
                self._merchant_counts[key] -= 1
                if self._merchant_counts[key] <= 0:
                    del self._merchant_counts[key]
        logger.debug("Evicted %d oldest corrections", len(evicted))

    def _evict_training_examples(self):
        if len(self._training_examples) <= self.max_training_examples:
            return
        del self._training_examples[:self.training_eviction_batch]
        logger.debug("Evicted %d oldest training examples", self.training_eviction_batch)

    def adjustment_for(self, merchant_name: str) -> float:
        """Learned adjustment for a merchant, default 0.5 when unseen."""
        key = normalize_merchant_key(merchant_name)
        with self._lock:
            return self._adjustments.get(key, self.default_adjustment)

    def similar_case_count(self, merchant_name: str) -> int:
        """Number of stored corrections naming this merchant."""
        key = normalize_merchant_key(merchant_name)
        if not key:
            return 0
        with self._lock:
            return self._merchant_counts.get(key, 0)

    def corrections(self) -> Tuple[Correction, ...]:
        with self._lock:
            return tuple(self._corrections)

    def training_examples(self) -> List[TrainingExample]:
        with self._lock:
            return list(self._training_examples)

    def stats(self) -> Dict:
        with self._lock:
            return {
                "corrections": len(self._corrections),
                "merchants_tracked": len(self._adjustments),
                "training_examples": len(self._training_examples),
            }
