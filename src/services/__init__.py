"""Services module for the EOS risk calculator.

Provides the reactive binding between the page inputs and the risk model.
"""

from .risk_service import RiskSession

__all__ = ["RiskSession"]
