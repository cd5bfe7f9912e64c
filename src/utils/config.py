"""Application configuration for the EOS risk calculator.

This module provides centralized configuration management with support for
environment variable overrides and a singleton pattern for consistent access.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from models.eos.eos_model import ClinicalInputs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SliderBounds:
    """Range and step of a numeric input slider.

    Raises:
        ValueError: If min_value is not below max_value or step is not positive.
    """
    min_value: float
    max_value: float
    step: float

    def __post_init__(self):
        if not self.min_value < self.max_value:
            raise ValueError(
                f"min_value must be below max_value, got "
                f"{self.min_value} >= {self.max_value}"
            )
        if self.step <= 0:
            raise ValueError(f"step must be positive, got {self.step}")

    def contains(self, value: float) -> bool:
        return self.min_value <= value <= self.max_value


@dataclass
class Config:
    """Application configuration settings.

    Attributes:
        INCIDENCE_BOUNDS: EOS incidence slider (per 1000 births).
        TEMPERATURE_BOUNDS: Highest maternal temperature slider (degrees C).
        ROM_BOUNDS: Rupture of membranes slider (hours).
        GESTATIONAL_AGE_BOUNDS: Gestational age slider (weeks, step of one day).
        DEFAULT_INCIDENCE: Initial EOS incidence.
        DEFAULT_TEMP_C: Initial maternal temperature.
        DEFAULT_ROM_HOURS: Initial rupture of membranes.
        DEFAULT_GA_WEEKS: Initial gestational age.

    Example:
        >>> config = get_config()
        >>> config.TEMPERATURE_BOUNDS.max_value
        41.0
        >>> config.default_inputs().eos_incidence
        0.8
    """

    INCIDENCE_BOUNDS: SliderBounds = field(
        default_factory=lambda: SliderBounds(0.1, 1.0, 0.1)
    )
    TEMPERATURE_BOUNDS: SliderBounds = field(
        default_factory=lambda: SliderBounds(35.0, 41.0, 0.1)
    )
    ROM_BOUNDS: SliderBounds = field(
        default_factory=lambda: SliderBounds(0.0, 240.0, 1.0)
    )
    GESTATIONAL_AGE_BOUNDS: SliderBounds = field(
        default_factory=lambda: SliderBounds(34.0, 43.0, 1 / 7)
    )

    # Initial slider positions
    DEFAULT_INCIDENCE: float = 0.8
    DEFAULT_TEMP_C: float = 37.0
    DEFAULT_ROM_HOURS: float = 12.0
    DEFAULT_GA_WEEKS: float = 40.0

    def default_inputs(self) -> ClinicalInputs:
        """Build the initial input record, all flags off."""
        return ClinicalInputs(
            eos_incidence=self.DEFAULT_INCIDENCE,
            maternal_temp_c=self.DEFAULT_TEMP_C,
            rupture_of_membranes_hours=self.DEFAULT_ROM_HOURS,
            gestational_age_weeks=self.DEFAULT_GA_WEEKS,
        )


# Singleton instance storage
_config_instance: Optional[Config] = None


def get_config() -> Config:
    """Get the singleton configuration instance.

    Returns:
        Config: The singleton configuration instance.

    Example:
        >>> config1 = get_config()
        >>> config2 = get_config()
        >>> config1 is config2
        True
    """
    global _config_instance

    if _config_instance is None:
        _config_instance = Config()
        load_env_config(_config_instance)

    return _config_instance


def _override_default(
    config: Config,
    env_var: str,
    attribute: str,
    bounds: SliderBounds,
) -> None:
    raw = os.environ.get(env_var)
    if not raw:
        return

    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring {env_var}={raw!r}: not a number")
        return

    if bounds.contains(value):
        setattr(config, attribute, value)
    else:
        logger.warning(
            f"Ignoring {env_var}={value}: outside "
            f"[{bounds.min_value}, {bounds.max_value}]"
        )


def load_env_config(config: Optional[Config] = None) -> Config:
    """Load configuration from environment variables if present.

    Environment variables override default values. Supported variables:
        - EOSCALC_DEFAULT_INCIDENCE: Initial EOS incidence (0.1-1.0)
        - EOSCALC_DEFAULT_TEMP_C: Initial maternal temperature (35-41)
        - EOSCALC_DEFAULT_ROM_HOURS: Initial rupture of membranes (0-240)
        - EOSCALC_DEFAULT_GA_WEEKS: Initial gestational age (34-43)

    Values that do not parse or fall outside the slider range are ignored.

    Args:
        config: Optional Config instance to update. If None, creates a new one.

    Returns:
        Config: The updated configuration instance.

    Example:
        >>> import os
        >>> os.environ["EOSCALC_DEFAULT_INCIDENCE"] = "0.5"
        >>> config = load_env_config()
        >>> config.DEFAULT_INCIDENCE
        0.5
    """
    if config is None:
        config = Config()

    _override_default(
        config, "EOSCALC_DEFAULT_INCIDENCE", "DEFAULT_INCIDENCE", config.INCIDENCE_BOUNDS
    )
    _override_default(
        config, "EOSCALC_DEFAULT_TEMP_C", "DEFAULT_TEMP_C", config.TEMPERATURE_BOUNDS
    )
    _override_default(
        config, "EOSCALC_DEFAULT_ROM_HOURS", "DEFAULT_ROM_HOURS", config.ROM_BOUNDS
    )
    _override_default(
        config, "EOSCALC_DEFAULT_GA_WEEKS", "DEFAULT_GA_WEEKS", config.GESTATIONAL_AGE_BOUNDS
    )

    return config


def reset_config() -> None:
    """Reset the configuration singleton to None.

    Useful for testing or when configuration needs to be reloaded.
    """
    global _config_instance
    _config_instance = None
