"""
Deductibility rules for voluntary organisations.
Implements the decision table for associations/clubs and bands/corps;
every other organisation type is referred to an accountant.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from ..config.catalog_loader import MerchantProfile
from ..config.engine_config import COMPLIANCE_CONFIG, VAT_CONFIG
from ..categorisation.preprocess import organization_family

logger = logging.getLogger(__name__)


@dataclass
class ComplianceDecision:
    """Deductibility verdict for a purchase."""
    organization_type: str
    deductibility_verdict: str
    required_documents: List[str] = field(default_factory=list)
    approval_required: bool = False


class ComplianceEvaluator:
    """Applies organisation-type deduction rules to a purchase."""

    def __init__(self):
        """Initialize the evaluator with configuration."""
        self.config = COMPLIANCE_CONFIG
        self.approval_threshold = self.config["board_approval_threshold"]
        self.documentation_threshold = self.config["documentation_threshold"]
        self.grocery_categories = set(VAT_CONFIG["grocery_categories"])

    def evaluate(self, organization_type: str, merchant: MerchantProfile, amount: float) -> ComplianceDecision:
        """
        Evaluate whether a purchase can be claimed by the organisation.

        Args:
            organization_type: Organisation type as supplied by the caller
            merchant: Detected merchant profile
            amount: Gross amount in NOK

        Returns:
            ComplianceDecision
        """
        family = organization_family(organization_type)
        documents = list(self.config["base_documents"])
        approval_required = False

        if family == "association":
            verdict, approval_required = self._evaluate_association(merchant, amount, documents)
        elif family == "band":
            verdict = self._evaluate_band(merchant, documents)
        else:
            verdict = (
                f"Deductibility for organisation type '{organization_type or 'unknown'}' "
                "cannot be determined automatically; consult an accountant"
            )

        if amount > self.documentation_threshold:
            documents.extend(self.config["extended_documents"])

        logger.debug(
            "Compliance %s/%s %.2f: %s (approval=%s)",
            family, merchant.category, amount, verdict, approval_required,
        )
        return ComplianceDecision(
            organization_type=organization_type,
            deductibility_verdict=verdict,
            required_documents=documents,
            approval_required=approval_required,
        )

    def _evaluate_association(self, merchant: MerchantProfile, amount: float, documents: List[str]):
        approval_required = amount > self.approval_threshold
        if approval_required:
            documents.append("Board approval (meeting minutes)")

        if merchant.category in self.grocery_categories:
            documents.append("Documentation of purpose (activity or event)")
            verdict = "Partially deductible: grocery purchases only count when used for the association's activities"
        elif approval_required:
            verdict = f"Deductible for the association's activities after board approval (above {self.approval_threshold} NOK)"
        else:
            verdict = "Fully deductible for the association's activities"

        return verdict, approval_required

    def _evaluate_band(self, merchant: MerchantProfile, documents: List[str]) -> str:
        if merchant.is_regulated_alcohol:
            return f"Not deductible: alcohol from {merchant.name} cannot be covered by band funds"
        documents.append("Proof of band activity (concert, rehearsal or tour)")
        return "Deductible as a band activity expense"
