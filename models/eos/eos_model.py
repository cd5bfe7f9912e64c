"""
Neonatal Early-Onset Sepsis (EOS) Risk Model.

This module implements the Puopolo/Kaiser logistic-regression model for the
risk of early-onset sepsis in infants born at >= 34 weeks gestation. The
model is fixed: no training is required, all weights are published constants.

Model terms (logit = intercept + sum of weighted terms):
    - Intercept looked up from the local EOS incidence (per 1000 births)
    - Highest maternal intrapartum temperature, converted to degrees F
    - Rupture of membranes (hours), transformed as (ROM + 0.05) ** 0.2
    - Gestational age (weeks), linear and squared
    - Broad spectrum antibiotics given > 4h before delivery
    - Broad spectrum antibiotics 2-4h / GBS-specific antibiotics > 2h before
    - GBS positive
    - GBS unknown

References:
    Puopolo KM, et al. Estimating the probability of neonatal early-onset
    infection on the basis of maternal risk factors. Pediatrics.
    2011;128(5):e1155-e1163.

    van der Weijden BM, et al. Lancet Digital Health. 2024 (complete weights).
"""

import logging
import math
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Dict, Mapping, Optional

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


# Regression intercepts by EOS incidence per 1000 live births
INTERCEPT_TABLE: Mapping[float, float] = MappingProxyType({
    0.1: 38.952265,
    0.2: 39.646367,
    0.3: 40.0528,
    0.4: 40.3415,
    0.5: 40.5656,
    0.6: 40.7489,
    0.7: 40.903919,
    0.8: 41.0384,
    0.9: 41.1571,
    1.0: 41.263432,
})

COEFFICIENT_TABLE: Mapping[str, float] = MappingProxyType({
    "temperature": 0.868,
    "rupture_of_membranes": 1.2256,
    "gestational_age": -6.9325,
    "gestational_age_squared": 0.0877,
    "antibiotics_given_early": -1.1861,
    "antibiotics_2_to_4h_prior": -1.0488,
    "gbs_positive": 0.5771,
    "gbs_unknown": 0.0427,
})

INTERCEPT_KEY = "intercept"
FEATURE_NAMES = (INTERCEPT_KEY,) + tuple(COEFFICIENT_TABLE)

ROM_OFFSET_HOURS = 0.05
ROM_EXPONENT = 0.2

NUMERIC_INPUTS = (
    "eos_incidence",
    "maternal_temp_c",
    "rupture_of_membranes_hours",
    "gestational_age_weeks",
)
BOOLEAN_INPUTS = (
    "antibiotics_given_early",
    "antibiotics_2_to_4h_prior",
    "gbs_positive",
    "gbs_unknown",
)


@dataclass(frozen=True)
class ClinicalInputs:
    """Maternal and infant risk factors entered by the clinician.

    The antibiotic-timing flags and the GBS-status flags are clinically
    exclusive pairs, but setting both is accepted and scored as-is.
    """
    eos_incidence: float = 0.8
    maternal_temp_c: float = 37.0
    rupture_of_membranes_hours: float = 12.0
    gestational_age_weeks: float = 40.0
    antibiotics_given_early: bool = False
    antibiotics_2_to_4h_prior: bool = False
    gbs_positive: bool = False
    gbs_unknown: bool = False

    @classmethod
    def field_names(cls) -> tuple:
        return tuple(f.name for f in fields(cls))

    def to_dict(self) -> Dict[str, object]:
        return {name: getattr(self, name) for name in self.field_names()}


@dataclass(frozen=True)
class RiskResult:
    """Logit and sepsis probability for one evaluation."""
    logit: float
    probability: float

    @property
    def risk_per_1000(self) -> float:
        """Risk expressed per 1000 births."""
        return self.probability * 1000.0


@dataclass(frozen=True)
class RiskBreakdown:
    """All intermediate values of one evaluation, for display."""
    inputs: ClinicalInputs
    transformed: Mapping[str, float] = field(default_factory=dict)
    weighted: Mapping[str, float] = field(default_factory=dict)
    result: Optional[RiskResult] = None


def logistic(logit: float) -> float:
    """
    Map a logit to a probability with 1 / (1 + e^-logit).

    Written in the two-branch form so large negative logits do not overflow
    math.exp.
    """
    if logit >= 0:
        return 1.0 / (1.0 + math.exp(-logit))
    z = math.exp(logit)
    return z / (1.0 + z)


def nearest_incidence(eos_incidence: float) -> float:
    """
    Return the intercept table key closest to the given incidence.

    On an exact tie in distance the first key in table order wins.
    """
    return min(INTERCEPT_TABLE, key=lambda key: abs(key - eos_incidence))


def lookup_intercept(eos_incidence: float) -> float:
    """Return the regression intercept for the closest tabulated incidence."""
    return INTERCEPT_TABLE[nearest_incidence(eos_incidence)]


class EOSRiskModel:
    """
    Neonatal early-onset sepsis risk calculator.

    A fixed logistic-regression model with no trainable state. Every
    method is pure: the same inputs always produce the same outputs.

    Example:
        >>> model = EOSRiskModel()
        >>> result = model.evaluate(ClinicalInputs())
        >>> round(result.logit, 4)
        -8.3405
        >>> probabilities = model.predict_proba(infants_df)
    """

    def transform(self, inputs: ClinicalInputs) -> Dict[str, float]:
        """
        Apply the model's feature transforms.

        Args:
            inputs: Clinical inputs for one infant.

        Returns:
            Ordered mapping of feature name to transformed value. The
            intercept entry holds the looked-up regression intercept.
        """
        ga = inputs.gestational_age_weeks
        return {
            INTERCEPT_KEY: lookup_intercept(inputs.eos_incidence),
            "temperature": inputs.maternal_temp_c * 1.8 + 32,
            "rupture_of_membranes": (
                (inputs.rupture_of_membranes_hours + ROM_OFFSET_HOURS) ** ROM_EXPONENT
            ),
            "gestational_age": ga,
            "gestational_age_squared": ga ** 2,
            "antibiotics_given_early": 1 if inputs.antibiotics_given_early else 0,
            "antibiotics_2_to_4h_prior": 1 if inputs.antibiotics_2_to_4h_prior else 0,
            "gbs_positive": 1 if inputs.gbs_positive else 0,
            "gbs_unknown": 1 if inputs.gbs_unknown else 0,
        }

    def weigh(self, transformed: Mapping[str, float]) -> Dict[str, float]:
        """
        Multiply each transformed feature by its coefficient.

        The intercept carries an implicit weight of 1.
        """
        weighted = {INTERCEPT_KEY: transformed[INTERCEPT_KEY]}
        for name, coefficient in COEFFICIENT_TABLE.items():
            weighted[name] = transformed[name] * coefficient
        return weighted

    def breakdown(self, inputs: ClinicalInputs) -> RiskBreakdown:
        """
        Evaluate the model and keep every intermediate value.

        Args:
            inputs: Clinical inputs for one infant.

        Returns:
            RiskBreakdown with transformed values, weighted values and result.
        """
        transformed = self.transform(inputs)
        weighted = self.weigh(transformed)
        logit = sum(weighted.values())
        result = RiskResult(logit=logit, probability=logistic(logit))

        logger.debug(
            f"Evaluated EOS risk: logit={logit:.4f} probability={result.probability:.5f}"
        )

        return RiskBreakdown(
            inputs=inputs,
            transformed=MappingProxyType(transformed),
            weighted=MappingProxyType(weighted),
            result=result,
        )

    def evaluate(self, inputs: ClinicalInputs) -> RiskResult:
        """
        Compute the EOS logit and probability for one infant.

        Inputs are expected to be within the UI slider bounds; values
        outside them are scored without complaint.

        Args:
            inputs: Clinical inputs for one infant.

        Returns:
            RiskResult with the logit and probability in (0, 1).
        """
        return self.breakdown(inputs).result

    def calculate_logit(self, df: pd.DataFrame) -> np.ndarray:
        """
        Calculate the logit for each row in the DataFrame.

        Args:
            df: One row per infant. Columns are named after the
                ClinicalInputs fields. The four numeric columns are
                required; a missing flag column is treated as all False.

        Returns:
            numpy array of float logits, one per row.

        Raises:
            ValueError: If a numeric input column is missing.
        """
        if len(df) == 0:
            return np.array([], dtype=np.float64)

        missing = [col for col in NUMERIC_INPUTS if col not in df.columns]
        if missing:
            raise ValueError(f"Missing required input columns: {missing}")

        keys = np.array(list(INTERCEPT_TABLE), dtype=np.float64)
        intercepts = np.array(list(INTERCEPT_TABLE.values()), dtype=np.float64)
        incidence = df["eos_incidence"].to_numpy(dtype=np.float64)
        # argmin returns the first minimum, same tie rule as nearest_incidence
        nearest = np.abs(incidence[:, None] - keys[None, :]).argmin(axis=1)

        temp_f = df["maternal_temp_c"].to_numpy(dtype=np.float64) * 1.8 + 32
        rom = (
            df["rupture_of_membranes_hours"].to_numpy(dtype=np.float64)
            + ROM_OFFSET_HOURS
        ) ** ROM_EXPONENT
        ga = df["gestational_age_weeks"].to_numpy(dtype=np.float64)

        logit = (
            intercepts[nearest]
            + temp_f * COEFFICIENT_TABLE["temperature"]
            + rom * COEFFICIENT_TABLE["rupture_of_membranes"]
            + ga * COEFFICIENT_TABLE["gestational_age"]
            + ga ** 2 * COEFFICIENT_TABLE["gestational_age_squared"]
        )

        for col in BOOLEAN_INPUTS:
            if col in df.columns:
                flag = df[col].fillna(False).astype(bool).to_numpy()
                logit = logit + flag.astype(np.float64) * COEFFICIENT_TABLE[col]

        return logit

    def predict_proba(self, df: pd.DataFrame) -> np.ndarray:
        """
        Generate probability estimates for each row in the DataFrame.

        Args:
            df: One row per infant, see calculate_logit.

        Returns:
            numpy array of shape (n_samples, 2) with probabilities
            for class 0 (no EOS) and class 1 (EOS).
        """
        logit = self.calculate_logit(df)
        if len(logit) == 0:
            return np.empty((0, 2), dtype=np.float64)

        # Stable logistic: exp of a non-positive number never overflows
        z = np.exp(-np.abs(logit))
        prob_positive = np.where(logit >= 0, 1.0 / (1.0 + z), z / (1.0 + z))
        return np.column_stack([1.0 - prob_positive, prob_positive])

    def get_feature_importance(self) -> dict:
        """
        Return the regression coefficient of each weighted feature.

        Returns:
            Dictionary mapping feature names to coefficients.
        """
        return dict(COEFFICIENT_TABLE)

    def __repr__(self) -> str:
        """Return string representation of the model."""
        return (
            f"EOSRiskModel(incidences={len(INTERCEPT_TABLE)}, "
            f"features={len(COEFFICIENT_TABLE)})"
        )
