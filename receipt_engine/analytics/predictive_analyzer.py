"""
Predictive spend analytics over historical transactions.
Aggregates spend by category and calendar month and projects it forward
with seasonal multipliers and budget recommendations.
"""

import logging
import statistics
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union

import pandas as pd

from ..config.engine_config import COMPLIANCE_CONFIG, PREDICTION_CONFIG
from ..categorisation.preprocess import organization_family
from ..errors import InputValidationError
from ..patterns.seasonal_patterns import SEASONAL_EVENTS

logger = logging.getLogger(__name__)


@dataclass
class HistoricalTransaction:
    """A past purchase supplied for prediction."""
    date: str  # YYYY-MM-DD
    merchant: str
    amount: float
    category: str
    season: Optional[str] = None
    cultural_event: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict) -> "HistoricalTransaction":
        """Build a transaction from a transport-layer JSON payload."""
        try:
            amount = float(data.get("amount", 0))
        except (TypeError, ValueError):
            raise InputValidationError(f"Transaction amount is not a number: {data.get('amount')!r}")
        return cls(
            date=str(data.get("date") or ""),
            merchant=data.get("merchant") or "",
            amount=amount,
            category=data.get("category") or "uncategorized",
            season=data.get("season"),
            cultural_event=data.get("cultural_event"),
        )


@dataclass
class SpendPrediction:
    """Forecast for one spending category."""
    category: str
    period: str
    predicted_amount: float
    confidence: float
    trend: str  # 'increasing' or 'stable'
    factors: List[str] = field(default_factory=list)


@dataclass
class SeasonalInsight:
    """Expected spend uplift around a cultural event."""
    event: str
    months: List[int]
    expected_increase: float
    categories: List[str] = field(default_factory=list)
    recommendation: str = ""


@dataclass
class BudgetRecommendation:
    """Suggested budget line."""
    category: str
    recommended_amount: float
    rationale: str
    risk_level: str
    optimization_tips: List[str] = field(default_factory=list)


@dataclass
class PredictiveAnalysisResult:
    """Complete predictive analysis."""
    predictions: List[SpendPrediction] = field(default_factory=list)
    seasonal_insights: List[SeasonalInsight] = field(default_factory=list)
    budget_recommendations: List[BudgetRecommendation] = field(default_factory=list)
    confidence_score: float = 0.0

    def to_dict(self) -> Dict:
        return asdict(self)


# Organisation-specific budgeting tips
ORGANIZATION_TIPS = {
    "association": [
        "Coordinate grocery purchases for events through one member",
        f"Get board approval before purchases above {COMPLIANCE_CONFIG['board_approval_threshold']} NOK",
    ],
    "band": [
        "Schedule instrument and uniform repairs outside concert season",
        "Keep alcohol purchases out of the band accounts",
    ],
    "other": [
        "Compare prices across chains before large purchases",
    ],
}


class PredictiveAnalyzer:
    """Projects future spend from historical transactions."""

    def __init__(self):
        """Initialize the analyzer with configuration."""
        self.config = PREDICTION_CONFIG
        self.timeframe_multipliers = self.config["timeframe_multipliers"]

    def analyze(
        self,
        transactions: Iterable[Union[HistoricalTransaction, Dict]],
        organization_type: str = "",
        timeframe: str = "next_month",
        analysis_type: Optional[str] = None,
    ) -> PredictiveAnalysisResult:
        """
        Produce spend predictions, seasonal insights and budget recommendations.

        Args:
            transactions: Historical transactions (dataclasses or JSON dicts)
            organization_type: Organisation type, used to tailor budget tips
            timeframe: 'next_month', 'next_quarter' or 'next_year'
            analysis_type: 'seasonal_trends', 'budget_forecast' or None

        Returns:
            PredictiveAnalysisResult

        Raises:
            InputValidationError: If no transactions were supplied
        """
        records = [
            t if isinstance(t, HistoricalTransaction) else HistoricalTransaction.from_dict(t)
            for t in (transactions or [])
        ]
        if not records:
            raise InputValidationError("At least one historical transaction is required for prediction")

        frame = pd.DataFrame([asdict(r) for r in records])
        category_totals = frame.groupby("category", sort=True)["amount"].agg(["sum", "count"])
        monthly_totals = self._monthly_totals(frame)

        timeframe_multiplier = self._timeframe_multiplier(timeframe)

        predictions = []
        for category, row in category_totals.iterrows():
            total = float(row["sum"])
            seasonal_multiplier, seasonal_reason = self._seasonal_multiplier(category, monthly_totals)
            predicted = total / 12 * timeframe_multiplier * seasonal_multiplier

            factors = [
                f"{int(row['count'])} historical transactions totalling {total:.2f} NOK",
                f"Timeframe {timeframe} (x{timeframe_multiplier})",
            ]
            if seasonal_reason:
                factors.append(seasonal_reason)

            predictions.append(SpendPrediction(
                category=category,
                period=timeframe,
                predicted_amount=round(predicted, 2),
                confidence=self._confidence(total),
                trend="increasing" if total > self.config["increasing_trend_threshold"] else "stable",
                factors=factors,
            ))

        insights = self._seasonal_insights()
        recommendations = self._budget_recommendations(predictions, organization_type)

        if analysis_type == "seasonal_trends":
            for insight in insights:
                insight.expected_increase = round(insight.expected_increase * self.config["seasonal_trends_factor"], 3)
        elif analysis_type == "budget_forecast":
            for rec in recommendations:
                rec.recommended_amount = round(rec.recommended_amount * self.config["budget_forecast_factor"], 2)
                rec.rationale = f"Conservative estimate (+15%): {rec.rationale}"

        confidence_score = round(statistics.mean(p.confidence for p in predictions), 4)

        logger.debug(
            "Predicted %d categories for %s, confidence %.3f",
            len(predictions), timeframe, confidence_score,
        )
        return PredictiveAnalysisResult(
            predictions=predictions,
            seasonal_insights=insights,
            budget_recommendations=recommendations,
            confidence_score=confidence_score,
        )

    def _monthly_totals(self, frame: pd.DataFrame) -> Dict[int, float]:
        """Spend per calendar month (1-12); rows with unparsable dates are skipped."""
        # Only the YYYY-MM-DD prefix counts, so ISO timestamps keep their month
        dates = pd.to_datetime(frame["date"].astype(str).str[:10], format="%Y-%m-%d", errors="coerce")
        skipped = int(dates.isna().sum())
        if skipped:
            logger.debug("Skipping %d transactions with unparsable dates from monthly totals", skipped)

        dated = frame.loc[dates.notna(), "amount"]
        if dated.empty:
            return {}
        grouped = dated.groupby(dates[dates.notna()].dt.month).sum()
        return {int(month): float(total) for month, total in grouped.items()}

    def _timeframe_multiplier(self, timeframe: str) -> int:
        if timeframe in self.timeframe_multipliers:
            return self.timeframe_multipliers[timeframe]
        logger.warning("Unknown timeframe %r, predicting one month", timeframe)
        return 1

    def _seasonal_multiplier(self, category: str, monthly_totals: Dict[int, float]) -> Tuple[float, Optional[str]]:
        name = category.lower()
        if "grocer" in name or "dagligvare" in name:
            return self.config["grocery_multiplier"], "Grocery spend trends slightly upward"

        if "alcohol" in name or "liquor" in name:
            if monthly_totals.get(12, 0.0) > monthly_totals.get(6, 0.0):
                return self.config["alcohol_winter_multiplier"], "December spend exceeds June spend"
            return self.config["alcohol_summer_multiplier"], "December spend does not exceed June spend"

        return 1.0, None

    def _confidence(self, total: float) -> float:
        confidence = self.config["base_confidence"] + max(0.0, total) * self.config["confidence_per_nok"]
        return round(min(self.config["max_confidence"], confidence), 4)

    def _seasonal_insights(self) -> List[SeasonalInsight]:
        return [
            SeasonalInsight(
                event=event["event"],
                months=list(event["months"]),
                expected_increase=event["expected_increase"],
                categories=list(event["categories"]),
                recommendation=event["recommendation"],
            )
            for event in SEASONAL_EVENTS
        ]

    def _budget_recommendations(
        self,
        predictions: List[SpendPrediction],
        organization_type: str,
    ) -> List[BudgetRecommendation]:
        total_predicted = sum(p.predicted_amount for p in predictions)
        org_tips = ORGANIZATION_TIPS[organization_family(organization_type)]

        emergency_share = self.config["emergency_reserve_share"]
        seasonal_share = self.config["seasonal_events_share"]

        return [
            BudgetRecommendation(
                category="emergency_reserve",
                recommended_amount=round(total_predicted * emergency_share, 2),
                rationale=f"{emergency_share:.0%} of predicted spend held back for unexpected costs",
                risk_level="medium",
                optimization_tips=["Keep the reserve in a separate account"] + org_tips,
            ),
            BudgetRecommendation(
                category="seasonal_events",
                recommended_amount=round(total_predicted * seasonal_share, 2),
                rationale=f"{seasonal_share:.0%} of predicted spend set aside for 17. mai, påske and jul",
                risk_level="high",
                optimization_tips=[
                    "Buy seasonal goods early while campaign prices apply",
                    "Review last year's event receipts before budgeting",
                ] + org_tips,
            ),
        ]
