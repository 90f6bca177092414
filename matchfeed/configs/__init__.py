"""Configuration objects and YAML loading."""

from .loader import load_config, validate_config, get_config_value
from .settings import MatchingConfig, PreferenceWeights, ComponentWeights, DEFAULT_CONFIG

__all__ = [
    "load_config",
    "validate_config",
    "get_config_value",
    "MatchingConfig",
    "PreferenceWeights",
    "ComponentWeights",
    "DEFAULT_CONFIG",
]
