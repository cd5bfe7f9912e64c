"""Utility functions for the EOS risk calculator."""

from .config import Config, SliderBounds, get_config, load_env_config, reset_config

__all__ = [
    "Config",
    "SliderBounds",
    "get_config",
    "load_env_config",
    "reset_config",
]
