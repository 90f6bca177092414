"""
Configuration loading and validation.

This module handles loading of YAML configuration files and
reports problems with the scoring section before components are built.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List

import yaml

logger = logging.getLogger(__name__)


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(filepath, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    if "matching" not in config:
        issues.append("Missing required section: matching")
        return issues

    matching = config["matching"] or {}

    # Component weights must sum to 1
    components = matching.get("component_weights")
    if components:
        total = sum(components.values())
        if abs(total - 1.0) > 0.01:
            issues.append(f"Component weights don't sum to 1: {total}")

    # Visibility clamp must be a valid interval
    visibility = matching.get("visibility") or {}
    v_min = visibility.get("min", 0.1)
    v_max = visibility.get("max", 3.0)
    if not 0 < v_min <= v_max:
        issues.append(f"Visibility bounds must satisfy 0 < min <= max, got [{v_min}, {v_max}]")

    thresholds = matching.get("thresholds") or {}
    ordered = [thresholds.get(k) for k in ("match", "great", "perfect") if k in thresholds]
    if ordered != sorted(ordered):
        issues.append(f"Thresholds must be ordered match <= great <= perfect: {thresholds}")

    weights = matching.get("preference_weights") or {}
    if weights.get("outside", -10) > 0:
        issues.append(f"preference_weights.outside should be negative, got {weights['outside']}")

    if "global" in config and "random_seed" not in (config["global"] or {}):
        issues.append("Missing global.random_seed (feed shuffles will not be reproducible)")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "matching.thresholds.match")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    keys = path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value
