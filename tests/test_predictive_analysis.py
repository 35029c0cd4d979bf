"""
Tests for predictive spend analysis.
"""

import unittest

from receipt_engine.analytics.predictive_analyzer import HistoricalTransaction, PredictiveAnalyzer
from receipt_engine.errors import InputValidationError


def _monthly(category, amount, year=2024):
    return [
        HistoricalTransaction(date=f"{year}-{month:02d}-15", merchant="REMA 1000", amount=amount, category=category)
        for month in range(1, 13)
    ]


class TestPredictions(unittest.TestCase):
    """Test category predictions."""

    def setUp(self):
        """Set up test fixtures."""
        self.analyzer = PredictiveAnalyzer()

    def test_empty_history_rejected(self):
        with self.assertRaises(InputValidationError):
            self.analyzer.analyze([])
        with self.assertRaises(InputValidationError):
            self.analyzer.analyze(None)

    def test_grocery_next_year(self):
        result = self.analyzer.analyze(_monthly("grocery", 100.0), timeframe="next_year")
        self.assertEqual(len(result.predictions), 1)
        prediction = result.predictions[0]
        self.assertEqual(prediction.category, "grocery")
        self.assertEqual(prediction.period, "next_year")
        self.assertAlmostEqual(prediction.predicted_amount, 1320.0, places=2)
        self.assertAlmostEqual(prediction.confidence, 0.66)
        self.assertEqual(prediction.trend, "stable")

    def test_mixed_case_grocery_category_name(self):
        result = self.analyzer.analyze(_monthly("Grocery Store", 100.0), timeframe="next_year")
        prediction = result.predictions[0]
        self.assertEqual(prediction.category, "Grocery Store")
        self.assertAlmostEqual(prediction.predicted_amount, 1320.0, places=2)

    def test_timeframe_multipliers(self):
        history = _monthly("equipment", 100.0)
        expected = {"next_month": 100.0, "next_quarter": 300.0, "next_year": 1200.0}
        for timeframe, amount in expected.items():
            result = self.analyzer.analyze(history, timeframe=timeframe)
            self.assertAlmostEqual(result.predictions[0].predicted_amount, amount, places=2, msg=timeframe)

    def test_unknown_timeframe_predicts_one_month(self):
        with self.assertLogs("receipt_engine.analytics.predictive_analyzer", level="WARNING"):
            result = self.analyzer.analyze(_monthly("equipment", 100.0), timeframe="next_decade")
        self.assertAlmostEqual(result.predictions[0].predicted_amount, 100.0, places=2)

    def test_confidence_grows_with_history_and_is_capped(self):
        confidences = [
            self.analyzer.analyze(_monthly("equipment", amount)).predictions[0].confidence
            for amount in (10.0, 100.0, 500.0, 1000.0, 5000.0)
        ]
        self.assertEqual(confidences, sorted(confidences))
        self.assertLessEqual(max(confidences), 0.95)
        self.assertEqual(confidences[-1], 0.95)

    def test_increasing_trend_above_threshold(self):
        result = self.analyzer.analyze(_monthly("equipment", 500.0))
        self.assertEqual(result.predictions[0].trend, "increasing")

    def test_one_prediction_per_category(self):
        history = _monthly("grocery", 100.0) + _monthly("equipment", 50.0)
        result = self.analyzer.analyze(history)
        self.assertEqual(sorted(p.category for p in result.predictions), ["equipment", "grocery"])
        self.assertAlmostEqual(
            result.confidence_score,
            round(sum(p.confidence for p in result.predictions) / 2, 4),
        )


class TestAlcoholSeasonality(unittest.TestCase):
    """December versus June spend drives the alcohol multiplier."""

    def setUp(self):
        """Set up test fixtures."""
        self.analyzer = PredictiveAnalyzer()

    def _alcohol(self, december, june):
        return [
            HistoricalTransaction("2024-12-20", "Vinmonopolet", december, "alcohol"),
            HistoricalTransaction("2024-06-20", "Vinmonopolet", june, "alcohol"),
        ]

    def test_winter_heavy_history(self):
        result = self.analyzer.analyze(self._alcohol(500.0, 100.0))
        self.assertAlmostEqual(result.predictions[0].predicted_amount, 65.0, places=2)

    def test_summer_heavy_history(self):
        result = self.analyzer.analyze(self._alcohol(100.0, 500.0))
        self.assertAlmostEqual(result.predictions[0].predicted_amount, 45.0, places=2)

    def test_timestamps_keep_their_month(self):
        history = [
            HistoricalTransaction("2024-12-20T10:00:00", "Vinmonopolet", 500.0, "alcohol"),
            HistoricalTransaction("2024-06-20T10:00:00", "Vinmonopolet", 100.0, "alcohol"),
        ]
        result = self.analyzer.analyze(history)
        self.assertAlmostEqual(result.predictions[0].predicted_amount, 65.0, places=2)

    def test_unparsable_dates_skipped_from_monthly_totals(self):
        history = self._alcohol(500.0, 100.0) + [
            HistoricalTransaction("17/06/2024", "Vinmonopolet", 1000.0, "alcohol"),
        ]
        result = self.analyzer.analyze(history)
        # Total still includes the undated row; June stays at 100
        self.assertAlmostEqual(result.predictions[0].predicted_amount, 1600.0 / 12 * 1.3, places=2)


class TestInsightsAndBudget(unittest.TestCase):
    """Seasonal insights and budget recommendations."""

    def setUp(self):
        """Set up test fixtures."""
        self.analyzer = PredictiveAnalyzer()
        self.history = _monthly("equipment", 100.0)

    def test_seasonal_insights_listed(self):
        result = self.analyzer.analyze(self.history)
        events = {i.event: i for i in result.seasonal_insights}
        self.assertIn("17. mai", events)
        self.assertIn("Jul", events)
        self.assertAlmostEqual(events["Jul"].expected_increase, 1.8)

    def test_seasonal_trends_raise_expected_increase(self):
        result = self.analyzer.analyze(self.history, analysis_type="seasonal_trends")
        events = {i.event: i for i in result.seasonal_insights}
        self.assertAlmostEqual(events["Jul"].expected_increase, 1.98)
        self.assertAlmostEqual(events["17. mai"].expected_increase, 1.54)

    def test_budget_shares(self):
        result = self.analyzer.analyze(self.history)
        budget = {r.category: r for r in result.budget_recommendations}
        self.assertAlmostEqual(budget["emergency_reserve"].recommended_amount, 15.0, places=2)
        self.assertEqual(budget["emergency_reserve"].risk_level, "medium")
        self.assertAlmostEqual(budget["seasonal_events"].recommended_amount, 25.0, places=2)
        self.assertEqual(budget["seasonal_events"].risk_level, "high")

    def test_budget_forecast_is_conservative(self):
        result = self.analyzer.analyze(self.history, analysis_type="budget_forecast")
        budget = {r.category: r for r in result.budget_recommendations}
        self.assertAlmostEqual(budget["emergency_reserve"].recommended_amount, 17.25, places=2)
        self.assertAlmostEqual(budget["seasonal_events"].recommended_amount, 28.75, places=2)
        self.assertTrue(budget["seasonal_events"].rationale.startswith("Conservative estimate"))

    def test_organisation_tips(self):
        result = self.analyzer.analyze(self.history, organization_type="skolekorps")
        tips = result.budget_recommendations[0].optimization_tips
        self.assertIn("Keep alcohol purchases out of the band accounts", tips)

    def test_dict_transactions_accepted(self):
        result = self.analyzer.analyze([
            {"date": "2024-05-17", "merchant": "REMA 1000", "amount": "240", "category": "grocery"},
            {"date": "2024-05-18", "merchant": "Lokal", "amount": 120},
        ])
        categories = sorted(p.category for p in result.predictions)
        self.assertEqual(categories, ["grocery", "uncategorized"])
        self.assertIn("predictions", result.to_dict())

    def test_non_numeric_amount_rejected(self):
        with self.assertRaises(InputValidationError):
            self.analyzer.analyze([{"date": "2024-05-17", "merchant": "X", "amount": "mange", "category": "c"}])


if __name__ == '__main__':
    unittest.main()
