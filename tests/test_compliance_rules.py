"""
Tests for the organisation-type deduction rules.
"""

import unittest

from receipt_engine.compliance.compliance_evaluator import ComplianceEvaluator
from receipt_engine.config.catalog_loader import UNKNOWN_MERCHANT, load_merchant_catalog

BASE_DOCUMENT = "Original receipt"
VOUCHER_DOCUMENT = "Voucher number (bilagsnummer)"
PURPOSE_DOCUMENT = "Date and purpose of purchase"


class TestAssociationRules(unittest.TestCase):
    """Association and club purchases."""

    def setUp(self):
        """Set up test fixtures."""
        self.evaluator = ComplianceEvaluator()
        self.catalog = load_merchant_catalog()

    def test_small_grocery_purchase_partially_deductible(self):
        decision = self.evaluator.evaluate("association", self.catalog["REMA"], 63.40)
        self.assertIn("Partially deductible", decision.deductibility_verdict)
        self.assertFalse(decision.approval_required)
        self.assertEqual(decision.required_documents[0], BASE_DOCUMENT)
        self.assertIn("Documentation of purpose (activity or event)", decision.required_documents)
        self.assertNotIn(VOUCHER_DOCUMENT, decision.required_documents)

    def test_club_spelling_uses_association_rules(self):
        for org in ("club", "Idrettslag", " Forening "):
            decision = self.evaluator.evaluate(org, self.catalog["KIWI"], 200.0)
            self.assertIn("Partially deductible", decision.deductibility_verdict, org)

    def test_large_purchase_requires_board_approval(self):
        decision = self.evaluator.evaluate("association", self.catalog["XXL"], 7500.0)
        self.assertTrue(decision.approval_required)
        self.assertIn("board approval", decision.deductibility_verdict)
        self.assertIn("Board approval (meeting minutes)", decision.required_documents)
        self.assertIn(VOUCHER_DOCUMENT, decision.required_documents)
        self.assertIn(PURPOSE_DOCUMENT, decision.required_documents)

    def test_approval_threshold_is_exclusive(self):
        decision = self.evaluator.evaluate("association", self.catalog["XXL"], 5000.0)
        self.assertFalse(decision.approval_required)

    def test_large_grocery_purchase_needs_purpose_and_approval(self):
        decision = self.evaluator.evaluate("association", self.catalog["MENY"], 6000.0)
        self.assertTrue(decision.approval_required)
        self.assertIn("Partially deductible", decision.deductibility_verdict)

    def test_ordinary_purchase_fully_deductible(self):
        decision = self.evaluator.evaluate("association", self.catalog["CLASOHLSON"], 450.0)
        self.assertEqual(decision.deductibility_verdict, "Fully deductible for the association's activities")
        self.assertEqual(decision.required_documents, [BASE_DOCUMENT])


class TestBandRules(unittest.TestCase):
    """Band and corps purchases."""

    def setUp(self):
        """Set up test fixtures."""
        self.evaluator = ComplianceEvaluator()
        self.catalog = load_merchant_catalog()

    def test_alcohol_not_deductible(self):
        decision = self.evaluator.evaluate("band", self.catalog["VINMONOPOLET"], 800.0)
        self.assertIn("Not deductible", decision.deductibility_verdict)
        self.assertEqual(decision.required_documents, [BASE_DOCUMENT])

    def test_other_purchase_deductible_with_activity_proof(self):
        decision = self.evaluator.evaluate("skolekorps", self.catalog["REMA"], 300.0)
        self.assertEqual(decision.deductibility_verdict, "Deductible as a band activity expense")
        self.assertIn("Proof of band activity (concert, rehearsal or tour)", decision.required_documents)
        self.assertFalse(decision.approval_required)


class TestOtherOrganisations(unittest.TestCase):
    """Organisation types outside the rule table."""

    def setUp(self):
        """Set up test fixtures."""
        self.evaluator = ComplianceEvaluator()

    def test_unknown_type_consults_accountant(self):
        for org in ("AS", "", None, "stiftelse"):
            decision = self.evaluator.evaluate(org, UNKNOWN_MERCHANT, 100.0)
            self.assertIn("consult an accountant", decision.deductibility_verdict)
            self.assertFalse(decision.approval_required)

    def test_documentation_threshold_applies_to_every_type(self):
        decision = self.evaluator.evaluate("AS", UNKNOWN_MERCHANT, 1500.0)
        self.assertEqual(decision.required_documents, [BASE_DOCUMENT, VOUCHER_DOCUMENT, PURPOSE_DOCUMENT])

    def test_documentation_threshold_is_exclusive(self):
        decision = self.evaluator.evaluate("AS", UNKNOWN_MERCHANT, 1000.0)
        self.assertEqual(decision.required_documents, [BASE_DOCUMENT])


if __name__ == '__main__':
    unittest.main()
