"""
NeoEOS - Interactive Neonatal Sepsis Risk Calculator

Main Streamlit application entry point.
Computes the early-onset sepsis (EOS) risk of an infant from maternal risk
factors with the Puopolo/Kaiser logistic-regression model.
"""

import streamlit as st

# Configure page - must be first Streamlit command
st.set_page_config(
    page_title="NeoEOS Risk Calculator",
    layout="wide",
    initial_sidebar_state="expanded",
)

from src.services.risk_service import RiskSession
from src.utils.cache import get_cached_model
from src.utils.config import get_config
from src.visualization.charts import (
    create_contribution_chart,
    create_incidence_sensitivity_chart,
    create_logistic_chart,
)
from src.visualization.components import (
    FEATURE_ROWS,
    breakdown_table,
    format_gestational_age,
    metric_card,
    weighting_label,
)
from src.visualization.theme import apply_clinical_theme

# Widget key prefix for input fields held in st.session_state
INPUT_KEY_PREFIX = "input_"

# Input field -> (Config bounds attribute, slider number format)
SLIDER_INPUTS = {
    "eos_incidence": ("INCIDENCE_BOUNDS", "%.1f"),
    "maternal_temp_c": ("TEMPERATURE_BOUNDS", "%.1f"),
    "rupture_of_membranes_hours": ("ROM_BOUNDS", "%.0f"),
    "gestational_age_weeks": ("GESTATIONAL_AGE_BOUNDS", "%.2f"),
}


def init_session_state():
    """Initialize session state with one risk session per browser session."""
    if "risk_session" not in st.session_state:
        config = get_config()
        st.session_state.risk_session = RiskSession(
            inputs=config.default_inputs(),
            model=get_cached_model(),
        )


def get_session() -> RiskSession:
    return st.session_state.risk_session


# ============================================================================
# INPUT CALLBACKS
# ============================================================================

def _on_input_change(field_name: str):
    """Push a widget change into the risk session."""
    value = st.session_state[INPUT_KEY_PREFIX + field_name]
    get_session().update(**{field_name: value})


def _on_reset():
    """Restore default inputs and drop widget state so sliders follow."""
    for key in list(st.session_state.keys()):
        if key.startswith(INPUT_KEY_PREFIX):
            del st.session_state[key]
    get_session().reset()


def render_input_widget(field_name: str):
    """Render the slider or checkbox bound to one ClinicalInputs field."""
    session = get_session()
    value = getattr(session.inputs, field_name)
    key = INPUT_KEY_PREFIX + field_name
    if key not in st.session_state:
        st.session_state[key] = value

    if field_name in SLIDER_INPUTS:
        bounds_attr, number_format = SLIDER_INPUTS[field_name]
        bounds = getattr(get_config(), bounds_attr)
        st.slider(
            field_name,
            min_value=float(bounds.min_value),
            max_value=float(bounds.max_value),
            step=float(bounds.step),
            format=number_format,
            key=key,
            on_change=_on_input_change,
            args=(field_name,),
            label_visibility="collapsed",
        )
        if field_name == "gestational_age_weeks":
            st.caption(format_gestational_age(value))
    else:
        st.checkbox(
            field_name,
            key=key,
            on_change=_on_input_change,
            args=(field_name,),
            label_visibility="collapsed",
        )


# ============================================================================
# PAGE FUNCTIONS
# ============================================================================

def render_sidebar():
    """Render the sidebar navigation."""
    with st.sidebar:
        st.markdown("## NeoEOS")
        st.markdown("*Neonatal Sepsis Risk Calculator*")
        st.divider()

        page = st.radio(
            "Navigation",
            ["Calculator", "Documentation"],
            label_visibility="collapsed",
        )

        st.divider()
        st.button("Reset inputs", on_click=_on_reset, use_container_width=True)

        st.divider()
        st.caption("v0.1.0 | Puopolo et al. 2011")

        return page


def render_calculator():
    """Render the interactive calculator page."""
    apply_clinical_theme()

    st.title("Interactive Neonatal Sepsis Risk Calculator")

    session = get_session()
    breakdown = session.breakdown
    table = breakdown_table(breakdown)

    col_table, col_results = st.columns([3, 2])

    with col_table:
        widths = [3, 4, 1.5, 1.5]
        header = st.columns(widths)
        header[1].markdown("**Input**")
        header[2].markdown("**Transformed**")
        header[3].markdown("**Weighted**")

        for idx, row in enumerate(FEATURE_ROWS):
            c_label, c_input, c_transformed, c_weighted = st.columns(widths)
            c_label.markdown(row.label)
            with c_input:
                if row.input_field is not None:
                    render_input_widget(row.input_field)
            c_transformed.markdown(
                table.loc[idx, "Transformed"], help=row.explanation
            )
            c_weighted.markdown(
                table.loc[idx, "Weighted"], help=weighting_label(row.key)
            )

        with st.expander("Breakdown table", expanded=False):
            st.dataframe(table, use_container_width=True, hide_index=True)

    with col_results:
        result = breakdown.result
        st.markdown(
            metric_card(
                "Logit",
                f"{result.logit:.4f}",
                "Sum of all the weighted individual scores",
            ),
            unsafe_allow_html=True,
        )
        st.markdown(
            metric_card(
                "Sepsis Risk",
                f"{result.probability:.5f}",
                "Logistic transform of the logit: 1/(1+e<sup>-logit</sup>)",
            ),
            unsafe_allow_html=True,
        )
        st.markdown(
            metric_card(
                "Risk per 1000 births",
                f"{result.risk_per_1000:.2f}",
                "Risk per birth x1000",
            ),
            unsafe_allow_html=True,
        )

    st.markdown("### Risk Analysis")

    tab1, tab2, tab3 = st.tabs(["Logit vs. Risk", "Contributions", "Incidence Sensitivity"])

    with tab1:
        fig = create_logistic_chart(breakdown.result.logit)
        st.plotly_chart(fig, use_container_width=True)

    with tab2:
        fig = create_contribution_chart(breakdown.weighted)
        st.plotly_chart(fig, use_container_width=True)

    with tab3:
        fig = create_incidence_sensitivity_chart(breakdown.inputs, session.model)
        st.plotly_chart(fig, use_container_width=True)

    render_footer()


def render_documentation():
    """Render the documentation page."""
    apply_clinical_theme()

    st.title("Documentation")

    tab1, tab2 = st.tabs(["Model", "Inputs"])

    with tab1:
        st.markdown("""
        ### Early-Onset Sepsis Risk Model

        The calculator estimates the probability of early-onset sepsis in an
        infant born at 34 weeks gestation or later, from maternal risk factors
        available at delivery.

        **Steps**
        1. Look up the intercept for the closest tabulated EOS incidence
           (0.1 to 1.0 per 1000 births).
        2. Transform the inputs: temperature to degrees F, rupture of
           membranes as (ROM + 0.05)<sup>0.2</sup>, gestational age linear
           and squared, each checkbox as 1 or 0.
        3. Multiply each transformed value by its weighting and add the
           intercept. The sum is the **logit**.
        4. The risk is the logistic function of the logit:
           1 / (1 + e<sup>-logit</sup>).

        A logit of 0 corresponds to a risk of 0.5. Risk rises monotonically
        with the logit.
        """, unsafe_allow_html=True)

    with tab2:
        st.markdown("""
        | Input | Range | Step |
        |-------|-------|------|
        | EOS incidence (per 1000 births) | 0.1 - 1.0 | 0.1 |
        | Highest maternal temperature (C) | 35 - 41 | 0.1 |
        | Rupture of membranes (hours) | 0 - 240 | 1 |
        | Gestational age (weeks) | 34 - 43 | 1 day |

        The antibiotic-timing checkboxes and the GBS-status checkboxes are
        clinically exclusive pairs. The calculator does not enforce this and
        scores whatever combination is ticked.
        """)

    render_footer()


def render_footer():
    """Render the credits footer."""
    st.markdown(
        """
        <div class="eos-footer">
            <p>Created by <a href="https://www.linkedin.com/in/alexpybrown/">Alex Brown</a>
            for the <a href="https://londonpaediatrics.co.uk/">London School of
            Paediatrics AI Teaching Day</a></p>
            <p>Model derived in:
            <a href="https://doi.org/10.1542/peds.2010-3464">Puopolo et al. 2011</a></p>
            <p>Complete weights reported in:
            <a href="https://doi.org/10.1016/S2589-7500(23)00253-4">van der Weijden et al. 2024</a></p>
        </div>
        """,
        unsafe_allow_html=True,
    )


# ============================================================================
# MAIN APP
# ============================================================================

def main():
    """Main application entry point."""
    init_session_state()

    page = render_sidebar()

    if page == "Calculator":
        render_calculator()
    elif page == "Documentation":
        render_documentation()


if __name__ == "__main__":
    main()
