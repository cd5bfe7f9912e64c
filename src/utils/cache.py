"""Streamlit caching utilities for the EOS risk calculator.

The model holds no per-session state, so a single instance is shared
across all sessions through Streamlit's resource cache.
"""

import streamlit as st

from models.eos.eos_model import EOSRiskModel


@st.cache_resource(show_spinner=False)
def get_cached_model() -> EOSRiskModel:
    """Get the shared EOS risk model instance.

    Example:
        >>> model = get_cached_model()
        >>> model is get_cached_model()
        True
    """
    return EOSRiskModel()

