"""
Analytics Module for the Receipt Engine.

Contains spend aggregation over historical transactions and the forward
predictions, seasonal insights and budget recommendations built from it.
"""

from .predictive_analyzer import (
    HistoricalTransaction,
    SpendPrediction,
    SeasonalInsight,
    BudgetRecommendation,
    PredictiveAnalysisResult,
    PredictiveAnalyzer,
)

__all__ = [
    "HistoricalTransaction",
    "SpendPrediction",
    "SeasonalInsight",
    "BudgetRecommendation",
    "PredictiveAnalysisResult",
    "PredictiveAnalyzer",
]
