"""Risk Service - Reactive binding between the input record and the model.

The page holds exactly one mutable set of clinical inputs. Every field
update re-evaluates the EOS model and pushes the new breakdown to the
registered render callbacks, synchronously and in registration order.
"""

import logging
from dataclasses import replace
from typing import Callable, List, Optional

from models.eos.eos_model import ClinicalInputs, EOSRiskModel, RiskBreakdown

logger = logging.getLogger(__name__)

RenderCallback = Callable[[RiskBreakdown], None]


class RiskSession:
    """
    Current clinical inputs plus their latest evaluation.

    Example:
        >>> session = RiskSession()
        >>> session.subscribe(lambda b: print(f"{b.result.probability:.5f}"))
        >>> session.update(gbs_positive=True)
        0.00042
    """

    def __init__(
        self,
        inputs: Optional[ClinicalInputs] = None,
        model: Optional[EOSRiskModel] = None,
    ):
        """
        Initialize the session and evaluate the starting inputs.

        Args:
            inputs: Starting inputs. Defaults to ClinicalInputs().
            model: Model used for evaluation. Defaults to EOSRiskModel().
        """
        self.model = model or EOSRiskModel()
        self._initial_inputs = inputs or ClinicalInputs()
        self._inputs = self._initial_inputs
        self._subscribers: List[RenderCallback] = []
        self._breakdown = self.model.breakdown(self._inputs)

    @property
    def inputs(self) -> ClinicalInputs:
        return self._inputs

    @property
    def breakdown(self) -> RiskBreakdown:
        """Breakdown of the current inputs."""
        return self._breakdown

    def subscribe(self, callback: RenderCallback) -> Callable[[], None]:
        """
        Register a render callback.

        Args:
            callback: Called with the new RiskBreakdown after every change.

        Returns:
            A function that removes the callback again.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def update(self, **changes) -> RiskBreakdown:
        """
        Replace one or more input fields and re-evaluate.

        Args:
            **changes: ClinicalInputs field names and their new values.

        Returns:
            The new RiskBreakdown.

        Raises:
            ValueError: If a field name is not a ClinicalInputs field.
        """
        unknown = sorted(set(changes) - set(ClinicalInputs.field_names()))
        if unknown:
            raise ValueError(f"Unknown input fields: {unknown}")

        self._inputs = replace(self._inputs, **changes)
        return self._recompute()

    def reset(self) -> RiskBreakdown:
        """Restore the starting inputs and re-evaluate."""
        logger.info("Resetting EOS risk inputs to defaults")
        self._inputs = self._initial_inputs
        return self._recompute()

    def _recompute(self) -> RiskBreakdown:
        self._breakdown = self.model.breakdown(self._inputs)
        for callback in list(self._subscribers):
            callback(self._breakdown)
        return self._breakdown
