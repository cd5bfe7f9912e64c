"""Light clinical theme for the EOS risk calculator."""

import streamlit as st


COLORS = {
    "background": "#f8fafb",
    "card_bg": "#ffffff",
    "card_border": "#e0e4e8",
    "primary": "#0966d2",
    "secondary": "#6e7681",
    "success": "#1a7f37",
    "warning": "#b08500",
    "danger": "#da3633",
    "text_primary": "#24292f",
    "text_secondary": "#57606a",
}


def get_plotly_template() -> dict:
    """
    Get a Plotly template matching the clinical light theme.

    Returns:
        dict: Plotly template configuration dictionary.
    """
    axis = {
        "gridcolor": COLORS["card_border"],
        "linecolor": COLORS["card_border"],
        "tickcolor": COLORS["text_secondary"],
        "tickfont": {"color": COLORS["text_secondary"]},
        "title": {"font": {"color": COLORS["text_primary"]}},
        "zerolinecolor": COLORS["card_border"],
    }
    return {
        "layout": {
            "paper_bgcolor": COLORS["card_bg"],
            "plot_bgcolor": COLORS["card_bg"],
            "font": {
                "family": "Inter, -apple-system, BlinkMacSystemFont, sans-serif",
                "color": COLORS["text_primary"],
                "size": 12,
            },
            "title": {
                "font": {"size": 16, "color": COLORS["text_primary"]},
                "x": 0.5,
                "xanchor": "center",
            },
            "xaxis": dict(axis),
            "yaxis": dict(axis),
            "legend": {
                "bgcolor": "rgba(0,0,0,0)",
                "font": {"color": COLORS["text_primary"]},
                "bordercolor": COLORS["card_border"],
            },
            "colorway": [
                COLORS["primary"],
                COLORS["success"],
                COLORS["warning"],
                COLORS["danger"],
            ],
            "hoverlabel": {
                "bgcolor": COLORS["card_bg"],
                "bordercolor": COLORS["card_border"],
                "font": {"color": COLORS["text_primary"]},
            },
            "margin": {"l": 60, "r": 30, "t": 60, "b": 60},
        },
    }


def apply_clinical_theme() -> None:
    """
    Apply the clinical light theme CSS to the Streamlit application.
    """
    css = f"""
    <style>
        .stApp {{
            background-color: {COLORS["background"]};
        }}

        .main .block-container {{
            padding-top: 2rem;
            padding-bottom: 2rem;
        }}

        h1, h2, h3, h4, h5, h6 {{
            color: {COLORS["text_primary"]} !important;
        }}

        /* Metric cards */
        div[data-testid="metric-container"] {{
            background: {COLORS["card_bg"]};
            border: 1px solid {COLORS["card_border"]};
            border-radius: 12px;
            padding: 1rem;
            box-shadow: 0 1px 3px rgba(0, 0, 0, 0.08);
        }}

        div[data-testid="metric-container"] div[data-testid="stMetricValue"] {{
            color: {COLORS["primary"]} !important;
        }}

        /* Breakdown table */
        .stDataFrame {{
            border: 1px solid {COLORS["card_border"]};
            border-radius: 8px;
            overflow: hidden;
        }}

        .stSlider [data-testid="stThumbValue"] {{
            color: {COLORS["text_primary"]};
        }}

        .eos-footer {{
            text-align: center;
            color: {COLORS["text_secondary"]};
            font-size: 0.85rem;
            margin-top: 2rem;
        }}

        .eos-footer a {{
            color: {COLORS["primary"]};
        }}
    </style>
    """
    st.markdown(css, unsafe_allow_html=True)
