"""
Unit tests for the risk session.

Tests that input updates re-evaluate the model and notify render
callbacks, and that reset and unsubscribe behave.
"""

import pytest

from models.eos.eos_model import ClinicalInputs, EOSRiskModel, RiskBreakdown
from src.services.risk_service import RiskSession


class TestRiskSessionInitialization:
    """Tests for RiskSession initialization."""

    def test_default_inputs(self):
        """Test the session starts from ClinicalInputs defaults."""
        session = RiskSession()

        assert session.inputs == ClinicalInputs()
        assert isinstance(session.model, EOSRiskModel)

    def test_initial_breakdown_is_evaluated(self):
        """Test a breakdown is available before any update."""
        session = RiskSession()

        assert isinstance(session.breakdown, RiskBreakdown)
        assert session.breakdown.result == EOSRiskModel().evaluate(ClinicalInputs())

    def test_custom_inputs(self):
        """Test the session accepts starting inputs."""
        inputs = ClinicalInputs(eos_incidence=0.5, maternal_temp_c=38.0)
        session = RiskSession(inputs=inputs)

        assert session.inputs is inputs
        assert session.breakdown.inputs is inputs


class TestUpdate:
    """Tests for RiskSession.update."""

    def test_update_replaces_fields(self):
        """Test updated fields change and the rest are kept."""
        session = RiskSession()

        session.update(maternal_temp_c=38.5, gbs_positive=True)

        assert session.inputs.maternal_temp_c == 38.5
        assert session.inputs.gbs_positive is True
        assert session.inputs.eos_incidence == 0.8

    def test_update_recomputes_breakdown(self):
        """Test the breakdown follows the new inputs."""
        session = RiskSession()
        before = session.breakdown.result.probability

        returned = session.update(maternal_temp_c=39.5)

        assert returned is session.breakdown
        assert session.breakdown.result.probability > before

    def test_update_notifies_subscribers(self):
        """Test every subscriber receives the new breakdown."""
        session = RiskSession()
        first, second = [], []
        session.subscribe(first.append)
        session.subscribe(second.append)

        session.update(gbs_unknown=True)

        assert len(first) == 1
        assert len(second) == 1
        assert first[0] is session.breakdown
        assert first[0].inputs.gbs_unknown is True

    def test_subscribers_called_in_registration_order(self):
        """Test callbacks run synchronously in the order registered."""
        session = RiskSession()
        calls = []
        session.subscribe(lambda b: calls.append("a"))
        session.subscribe(lambda b: calls.append("b"))

        session.update(gestational_age_weeks=37.0)

        assert calls == ["a", "b"]

    def test_unknown_field_raises(self):
        """Test that an unknown field name raises ValueError."""
        session = RiskSession()

        with pytest.raises(ValueError, match="Unknown input fields"):
            session.update(heart_rate=160)

    def test_unknown_field_leaves_state_unchanged(self):
        """Test a rejected update neither changes inputs nor notifies."""
        session = RiskSession()
        calls = []
        session.subscribe(calls.append)

        with pytest.raises(ValueError):
            session.update(maternal_temp_c=39.0, heart_rate=160)

        assert session.inputs == ClinicalInputs()
        assert calls == []

    def test_exclusive_flags_not_validated(self):
        """Test both antibiotic timing flags can be set together."""
        session = RiskSession()

        session.update(antibiotics_given_early=True, antibiotics_2_to_4h_prior=True)

        weighted = session.breakdown.weighted
        assert weighted["antibiotics_given_early"] == -1.1861
        assert weighted["antibiotics_2_to_4h_prior"] == -1.0488


class TestSubscribe:
    """Tests for subscribe and unsubscribe."""

    def test_unsubscribe_stops_notifications(self):
        """Test a removed callback is not called again."""
        session = RiskSession()
        calls = []
        unsubscribe = session.subscribe(calls.append)

        session.update(maternal_temp_c=38.0)
        unsubscribe()
        session.update(maternal_temp_c=39.0)

        assert len(calls) == 1

    def test_unsubscribe_twice_is_harmless(self):
        """Test calling unsubscribe twice does not raise."""
        session = RiskSession()
        unsubscribe = session.subscribe(lambda b: None)

        unsubscribe()
        unsubscribe()

    def test_callback_may_unsubscribe_during_notification(self):
        """Test a callback removing itself does not skip the others."""
        session = RiskSession()
        calls = []
        holder = {}

        def once(breakdown):
            calls.append("once")
            holder["unsubscribe"]()

        holder["unsubscribe"] = session.subscribe(once)
        session.subscribe(lambda b: calls.append("always"))

        session.update(gbs_positive=True)
        session.update(gbs_positive=False)

        assert calls == ["once", "always", "always"]


class TestReset:
    """Tests for RiskSession.reset."""

    def test_reset_restores_starting_inputs(self):
        """Test reset returns to the inputs the session started with."""
        start = ClinicalInputs(eos_incidence=0.4)
        session = RiskSession(inputs=start)
        session.update(maternal_temp_c=40.0, gbs_positive=True)

        session.reset()

        assert session.inputs == start
        assert session.breakdown.result == EOSRiskModel().evaluate(start)

    def test_reset_notifies_subscribers(self):
        """Test reset pushes the restored breakdown to subscribers."""
        session = RiskSession()
        calls = []
        session.subscribe(calls.append)

        session.reset()

        assert len(calls) == 1
        assert calls[0].inputs == ClinicalInputs()
