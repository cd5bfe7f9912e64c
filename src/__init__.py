"""
NeoEOS - Interactive Neonatal Early-Onset Sepsis Risk Calculator

This package provides configuration, the reactive input session, and the
Streamlit presentation helpers around the fixed EOS logistic-regression model.
"""

__version__ = "0.1.0"
__author__ = "NeoEOS Team"
