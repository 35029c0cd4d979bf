"""
Compliance Module for the Receipt Engine.

Contains the organisation-type deduction rules.
"""

from .compliance_evaluator import ComplianceEvaluator, ComplianceDecision

__all__ = [
    "ComplianceEvaluator",
    "ComplianceDecision",
]
