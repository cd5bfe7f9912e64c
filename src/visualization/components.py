"""Streamlit UI components for the EOS risk calculator."""

from typing import List, NamedTuple, Optional

import pandas as pd

from models.eos.eos_model import COEFFICIENT_TABLE, INTERCEPT_KEY, RiskBreakdown

from .theme import COLORS


class FeatureRow(NamedTuple):
    """Display settings for one row of the breakdown table."""
    key: str
    label: str
    input_field: Optional[str]
    transformed_decimals: Optional[int]
    weighted_decimals: Optional[int]
    explanation: str


# None decimals means the raw value is shown (boolean flags)
FEATURE_ROWS: List[FeatureRow] = [
    FeatureRow(
        INTERCEPT_KEY, "EOS Incidence (per 1000 births)", "eos_incidence", 1, 1,
        "Intercept from a lookup table, different for each incidence",
    ),
    FeatureRow(
        "temperature", "Highest Maternal Temperature (C)", "maternal_temp_c", 1, 1,
        "Temperature converted to degrees F",
    ),
    FeatureRow(
        "rupture_of_membranes", "Rupture of Membranes (hours)",
        "rupture_of_membranes_hours", 3, 3,
        "ROM transformed as (ROM + 0.05)^0.2",
    ),
    FeatureRow(
        "gestational_age", "Gestational Age (weeks)", "gestational_age_weeks", 1, 1,
        "GA in weeks",
    ),
    FeatureRow(
        "gestational_age_squared", "Gestational Age (weeks), squared", None, 0, 1,
        "(GA in weeks)^2",
    ),
    FeatureRow(
        "antibiotics_given_early", "Broad spectrum antibiotics given >4h",
        "antibiotics_given_early", None, None, "1 if true; 0 if false",
    ),
    FeatureRow(
        "antibiotics_2_to_4h_prior", "Broad spectrum 2-4h / GBS-specific >2h",
        "antibiotics_2_to_4h_prior", None, None, "1 if true; 0 if false",
    ),
    FeatureRow(
        "gbs_positive", "GBS Positive", "gbs_positive", None, None,
        "1 if true; 0 if false",
    ),
    FeatureRow(
        "gbs_unknown", "GBS Unknown", "gbs_unknown", None, None,
        "1 if true; 0 if false",
    ),
]


def format_gestational_age(weeks: float) -> str:
    """
    Format a gestational age in weeks as whole weeks and days.

    Args:
        weeks: Gestational age in (fractional) weeks.

    Returns:
        str: For example "37 weeks 3 days".
    """
    total_days = int(round(weeks * 7))
    whole_weeks, days = divmod(total_days, 7)
    return f"{whole_weeks} weeks {days} days"


def weighting_label(key: str) -> str:
    """Tooltip text stating the weight applied to a feature."""
    if key == INTERCEPT_KEY:
        return "Weighting: 1"
    return f"Weighting: {COEFFICIENT_TABLE[key]}"


def _format_number(value: float, decimals: Optional[int]) -> str:
    # Adding 0.0 turns -0.0 into 0.0
    value = value + 0.0
    if decimals is None:
        return f"{value:g}"
    return f"{value:.{decimals}f}"


def _format_input(field: Optional[str], value) -> str:
    if field is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if field == "gestational_age_weeks":
        return format_gestational_age(value)
    return f"{value:g}"


def breakdown_table(breakdown: RiskBreakdown) -> pd.DataFrame:
    """
    Build the Input / Transformed / Weighted table for display.

    Args:
        breakdown: Result of EOSRiskModel.breakdown().

    Returns:
        pd.DataFrame: One row per model term, values formatted as strings
        with the precision shown on the calculator page.
    """
    inputs = breakdown.inputs.to_dict()
    rows = []
    for row in FEATURE_ROWS:
        raw_input = inputs.get(row.input_field) if row.input_field else None
        rows.append({
            "Feature": row.label,
            "Input": _format_input(row.input_field, raw_input),
            "Transformed": _format_number(
                breakdown.transformed[row.key], row.transformed_decimals
            ),
            "Weighted": _format_number(
                breakdown.weighted[row.key], row.weighted_decimals
            ),
            "Weighting": weighting_label(row.key),
        })
    return pd.DataFrame(rows)


def metric_card(title: str, value: str, caption: Optional[str] = None) -> str:
    """
    Create an HTML metric card component.

    Args:
        title: The metric title/label.
        value: The main metric value to display.
        caption: Optional explanatory line under the value.

    Returns:
        str: HTML string for the metric card.
    """
    caption_html = ""
    if caption is not None:
        caption_html = f"""
            <div style="
                font-size: 12px;
                color: {COLORS["text_secondary"]};
                margin-top: 4px;
            ">
                {caption}
            </div>
        """

    return f"""
    <div style="
        background-color: {COLORS["card_bg"]};
        border: 1px solid {COLORS["card_border"]};
        border-radius: 8px;
        padding: 16px 20px;
        display: flex;
        flex-direction: column;
        gap: 4px;
    ">
        <div style="
            font-size: 12px;
            font-weight: 500;
            color: {COLORS["text_secondary"]};
            text-transform: uppercase;
            letter-spacing: 0.5px;
        ">
            {title}
        </div>
        <div style="
            font-size: 28px;
            font-weight: 600;
            color: {COLORS["text_primary"]};
            line-height: 1.2;
        ">
            {value}
        </div>
        {caption_html}
    </div>
    """
