"""
Neonatal Early-Onset Sepsis (EOS) Risk Model Package.

This package provides the fixed logistic-regression model used to estimate
the probability of early-onset sepsis from maternal risk factors.
"""

from .eos_model import (
    EOSRiskModel,
    ClinicalInputs,
    RiskResult,
    RiskBreakdown,
    INTERCEPT_TABLE,
    COEFFICIENT_TABLE,
    logistic,
    nearest_incidence,
    lookup_intercept,
)

__all__ = [
    'EOSRiskModel',
    'ClinicalInputs',
    'RiskResult',
    'RiskBreakdown',
    'INTERCEPT_TABLE',
    'COEFFICIENT_TABLE',
    'logistic',
    'nearest_incidence',
    'lookup_intercept',
]
