"""
Fine-tuning simulation over collected training examples.

This is arithmetic, not learning: metrics are a fixed function of how many
examples there are, how many carry a label, how many epochs are run and
the learning rate relative to the calibrated default.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from ..config.engine_config import TRAINING_CONFIG
from ..errors import InputValidationError
from .learning_store import TrainingExample

logger = logging.getLogger(__name__)


@dataclass
class TrainingMetrics:
    """Reported outcome of a simulated fine-tuning run."""
    accuracy: float
    loss: float
    examples_used: int
    epochs: int
    learning_rate: float = TRAINING_CONFIG["default_learning_rate"]


def simulate_fine_tuning(
    examples: List[TrainingExample],
    epochs: int = 3,
    learning_rate: Optional[float] = None,
) -> TrainingMetrics:
    """
    Simulate a fine-tuning run.

    accuracy = floor + (ceiling - floor) * labelled_share * (1 - exp(-n * epochs * lr_scale / 500))
    loss     = base_loss * exp(-0.3 * epochs) / (1 + ln(1 + n))

    where labelled_share is the weight of labelled examples over the total
    weight (corrections are weighted by their confidence rating) and
    lr_scale is learning_rate divided by the configured default.

    Args:
        examples: Training examples, normally LearningStore.training_examples()
        epochs: Number of passes over the examples (>= 1)
        learning_rate: Step size (> 0); the configured default when omitted

    Returns:
        TrainingMetrics with accuracy never below the configured floor
    """
    if not examples:
        raise InputValidationError("No training examples available for fine-tuning")
    if epochs < 1:
        raise InputValidationError(f"epochs must be at least 1, got {epochs}")

    default_rate = TRAINING_CONFIG["default_learning_rate"]
    if learning_rate is None:
        learning_rate = default_rate
    if learning_rate <= 0:
        raise InputValidationError(f"learning_rate must be positive, got {learning_rate}")

    floor = TRAINING_CONFIG["accuracy_floor"]
    ceiling = TRAINING_CONFIG["accuracy_ceiling"]

    n = len(examples)
    total_weight = sum(e.weight for e in examples)
    labelled_weight = sum(
        e.weight for e in examples
        if e.merchant or e.category or e.vat_rate is not None or e.amount is not None
    )
    labelled_share = labelled_weight / total_weight if total_weight > 0 else 0.0
    lr_scale = learning_rate / default_rate

    accuracy = floor + (ceiling - floor) * labelled_share * (1 - math.exp(-n * epochs * lr_scale / 500))
    loss = TRAINING_CONFIG["base_loss"] * math.exp(-0.3 * epochs) / (1 + math.log1p(n))

    metrics = TrainingMetrics(
        accuracy=round(min(ceiling, max(floor, accuracy)), 4),
        loss=round(loss, 4),
        examples_used=n,
        epochs=epochs,
        learning_rate=learning_rate,
    )
    logger.info("Simulated fine-tuning on %d examples: accuracy %.4f, loss %.4f", n, metrics.accuracy, metrics.loss)
    return metrics
