"""Interactive Plotly charts for the EOS risk calculator."""

from dataclasses import replace
from typing import Mapping

import numpy as np
import plotly.graph_objects as go

from models.eos.eos_model import (
    INTERCEPT_TABLE,
    ClinicalInputs,
    EOSRiskModel,
)

from .components import FEATURE_ROWS
from .theme import COLORS, get_plotly_template


def create_logistic_chart(logit: float, span: float = 10.0) -> go.Figure:
    """
    Create the logit vs. risk curve with the current logit marked.

    Args:
        logit: Current logit to highlight.
        span: Half-width of the plotted logit range around zero. The range
              widens to include the current logit when it falls outside.

    Returns:
        go.Figure: Plotly figure with the logistic curve and a marker.
    """
    template = get_plotly_template()

    half_width = max(span, abs(logit) + 1.0)
    x = np.linspace(-half_width, half_width, 401)
    y = 1.0 / (1.0 + np.exp(-x))
    current = 1.0 / (1.0 + np.exp(-logit))

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=x,
            y=y,
            mode="lines",
            name="1 / (1 + e^-logit)",
            line=dict(color=COLORS["primary"], width=2),
            hovertemplate="Logit: %{x:.2f}<br>Risk: %{y:.5f}<extra></extra>",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=[logit],
            y=[current],
            mode="markers",
            name="Current infant",
            marker=dict(color=COLORS["danger"], size=12),
            hovertemplate="Logit: %{x:.4f}<br>Risk: %{y:.5f}<extra></extra>",
        )
    )

    fig.update_layout(**template["layout"])
    fig.update_layout(
        title_text="Logit vs. Sepsis Risk",
        xaxis_title="Logit",
        yaxis_title="Probability of EOS",
        hovermode="closest",
        height=380,
    )
    fig.update_yaxes(range=[0, 1])

    return fig


def create_contribution_chart(weighted: Mapping[str, float]) -> go.Figure:
    """
    Create a horizontal bar chart of each term's weighted contribution.

    Args:
        weighted: Weighted values from a RiskBreakdown.

    Returns:
        go.Figure: Plotly bar chart, positive terms in red, negative in green.
    """
    template = get_plotly_template()

    labels = [row.label for row in FEATURE_ROWS]
    values = [weighted[row.key] for row in FEATURE_ROWS]
    colors = [COLORS["danger"] if v > 0 else COLORS["success"] for v in values]

    fig = go.Figure(
        go.Bar(
            x=values,
            y=labels,
            orientation="h",
            marker_color=colors,
            hovertemplate="%{y}<br>Weighted: %{x:.4f}<extra></extra>",
        )
    )

    fig.update_layout(**template["layout"])
    fig.update_layout(
        title_text="Weighted Contributions to the Logit",
        xaxis_title="Weighted value",
        height=420,
        showlegend=False,
    )
    fig.update_yaxes(autorange="reversed")

    return fig


def create_incidence_sensitivity_chart(
    inputs: ClinicalInputs,
    model: EOSRiskModel,
) -> go.Figure:
    """
    Create a line chart of risk per 1000 births across all tabulated incidences.

    All other inputs are held at their current values.

    Args:
        inputs: Current clinical inputs.
        model: Model used for evaluation.

    Returns:
        go.Figure: Plotly line chart with the current incidence highlighted.
    """
    template = get_plotly_template()

    incidences = list(INTERCEPT_TABLE)
    risks = [
        model.evaluate(replace(inputs, eos_incidence=incidence)).risk_per_1000
        for incidence in incidences
    ]
    current = model.evaluate(inputs).risk_per_1000

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=incidences,
            y=risks,
            mode="lines+markers",
            name="Risk per 1000 births",
            line=dict(color=COLORS["primary"], width=2),
            hovertemplate=(
                "Incidence: %{x:.1f}/1000<br>"
                "Risk: %{y:.2f}/1000<extra></extra>"
            ),
        )
    )
    fig.add_trace(
        go.Scatter(
            x=[inputs.eos_incidence],
            y=[current],
            mode="markers",
            name="Current incidence",
            marker=dict(color=COLORS["danger"], size=12),
        )
    )

    fig.update_layout(**template["layout"])
    fig.update_layout(
        title_text="Risk Across Baseline EOS Incidence",
        xaxis_title="EOS incidence (per 1000 births)",
        yaxis_title="Risk per 1000 births",
        height=380,
    )

    return fig
