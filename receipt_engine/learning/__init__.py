"""
Learning Module for the Receipt Engine.

Stores user corrections, derives per-merchant confidence adjustments and
runs the fine-tuning simulation over collected examples.
"""

from .learning_store import LearningStore, Correction, CorrectionOutcome, TrainingExample
from .training import TrainingMetrics, simulate_fine_tuning

__all__ = [
    "LearningStore",
    "Correction",
    "CorrectionOutcome",
    "TrainingExample",
    "TrainingMetrics",
    "simulate_fine_tuning",
]
