"""Neonatal sepsis risk models."""

from .eos.eos_model import EOSRiskModel, ClinicalInputs, RiskResult, RiskBreakdown

__all__ = [
    "EOSRiskModel",
    "ClinicalInputs",
    "RiskResult",
    "RiskBreakdown",
]
