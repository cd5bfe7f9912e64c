"""
Unit tests for the visualization helpers.

Tests the breakdown table formatting, gestational age display, metric
cards, and the Plotly chart builders.
"""

import pytest
import plotly.graph_objects as go

from models.eos.eos_model import ClinicalInputs, EOSRiskModel, INTERCEPT_TABLE
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


@pytest.fixture
def default_breakdown():
    return EOSRiskModel().breakdown(ClinicalInputs())


class TestFormatGestationalAge:
    """Tests for format_gestational_age."""

    def test_whole_weeks(self):
        """Test a whole number of weeks shows zero days."""
        assert format_gestational_age(40.0) == "40 weeks 0 days"

    def test_weeks_and_days(self):
        """Test fractional weeks convert to days."""
        assert format_gestational_age(37 + 3 / 7) == "37 weeks 3 days"

    def test_slider_rounding_noise(self):
        """Test values a hair below a whole week roll over correctly."""
        assert format_gestational_age(34.99999999) == "35 weeks 0 days"


class TestBreakdownTable:
    """Tests for breakdown_table."""

    def test_one_row_per_term(self, default_breakdown):
        """Test the table has the nine model terms in order."""
        table = breakdown_table(default_breakdown)

        assert len(table) == 9
        assert list(table["Feature"]) == [row.label for row in FEATURE_ROWS]
        assert list(table.columns) == [
            "Feature", "Input", "Transformed", "Weighted", "Weighting",
        ]

    def test_default_values_formatted(self, default_breakdown):
        """Test the precision used for each row."""
        table = breakdown_table(default_breakdown).set_index("Feature")

        incidence = table.loc["EOS Incidence (per 1000 births)"]
        assert incidence["Input"] == "0.8"
        assert incidence["Transformed"] == "41.0"
        assert incidence["Weighted"] == "41.0"

        temperature = table.loc["Highest Maternal Temperature (C)"]
        assert temperature["Transformed"] == "98.6"
        assert temperature["Weighted"] == "85.6"

        rom = table.loc["Rupture of Membranes (hours)"]
        assert rom["Input"] == "12"
        assert rom["Transformed"] == "1.645"
        assert rom["Weighted"] == "2.016"

        ga = table.loc["Gestational Age (weeks)"]
        assert ga["Input"] == "40 weeks 0 days"
        assert ga["Transformed"] == "40.0"
        assert ga["Weighted"] == "-277.3"

        ga_squared = table.loc["Gestational Age (weeks), squared"]
        assert ga_squared["Input"] == ""
        assert ga_squared["Transformed"] == "1600"
        assert ga_squared["Weighted"] == "140.3"

    def test_flags_off_show_plain_zero(self, default_breakdown):
        """Test cleared flags show 0 rather than -0."""
        table = breakdown_table(default_breakdown).set_index("Feature")

        row = table.loc["Broad spectrum antibiotics given >4h"]
        assert row["Input"] == "No"
        assert row["Transformed"] == "0"
        assert row["Weighted"] == "0"

    def test_flag_on_shows_coefficient(self):
        """Test a set flag shows 1 and its raw weighting."""
        breakdown = EOSRiskModel().breakdown(ClinicalInputs(gbs_positive=True))
        table = breakdown_table(breakdown).set_index("Feature")

        row = table.loc["GBS Positive"]
        assert row["Input"] == "Yes"
        assert row["Transformed"] == "1"
        assert row["Weighted"] == "0.5771"

    def test_weighting_labels(self):
        """Test the tooltip text for intercept and features."""
        assert weighting_label("intercept") == "Weighting: 1"
        assert weighting_label("temperature") == "Weighting: 0.868"
        assert weighting_label("gestational_age") == "Weighting: -6.9325"


class TestMetricCard:
    """Tests for metric_card."""

    def test_contains_title_and_value(self):
        """Test the card renders title and value."""
        html = metric_card("Logit", "-8.3405")

        assert "Logit" in html
        assert "-8.3405" in html

    def test_caption_optional(self):
        """Test the caption appears only when given."""
        assert "Risk per birth" not in metric_card("Risk", "0.24")
        assert "Risk per birth" in metric_card("Risk", "0.24", "Risk per birth x1000")


class TestCharts:
    """Tests for the Plotly chart builders."""

    def test_logistic_chart_marks_current_logit(self):
        """Test the curve and the current point are plotted."""
        fig = create_logistic_chart(-8.34)

        assert isinstance(fig, go.Figure)
        assert len(fig.data) == 2
        marker = fig.data[1]
        assert marker.x[0] == -8.34
        assert marker.y[0] == pytest.approx(1 / (1 + 2.718281828459045 ** 8.34))

    def test_logistic_chart_range_covers_extreme_logit(self):
        """Test the x range widens to include a far-out logit."""
        fig = create_logistic_chart(-25.0)

        assert min(fig.data[0].x) <= -25.0

    def test_contribution_chart_bars(self, default_breakdown):
        """Test one bar per model term."""
        fig = create_contribution_chart(default_breakdown.weighted)

        assert len(fig.data) == 1
        assert len(fig.data[0].x) == len(FEATURE_ROWS)
        assert fig.data[0].x[0] == pytest.approx(41.0384)

    def test_incidence_sensitivity_chart(self):
        """Test risk is plotted for each tabulated incidence, rising with it."""
        model = EOSRiskModel()
        inputs = ClinicalInputs(eos_incidence=0.5)

        fig = create_incidence_sensitivity_chart(inputs, model)

        line = fig.data[0]
        assert list(line.x) == list(INTERCEPT_TABLE)
        assert all(a < b for a, b in zip(line.y, line.y[1:]))
        assert fig.data[1].y[0] == pytest.approx(model.evaluate(inputs).risk_per_1000)
