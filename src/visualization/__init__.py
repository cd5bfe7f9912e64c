"""Visualization components for the EOS risk calculator."""

from .theme import COLORS, get_plotly_template, apply_clinical_theme
from .charts import (
    create_logistic_chart,
    create_contribution_chart,
    create_incidence_sensitivity_chart,
)
from .components import (
    FEATURE_ROWS,
    breakdown_table,
    format_gestational_age,
    metric_card,
    weighting_label,
)

__all__ = [
    "COLORS",
    "get_plotly_template",
    "apply_clinical_theme",
    "create_logistic_chart",
    "create_contribution_chart",
    "create_incidence_sensitivity_chart",
    "FEATURE_ROWS",
    "breakdown_table",
    "format_gestational_age",
    "metric_card",
    "weighting_label",
]
