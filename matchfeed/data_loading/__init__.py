"""Profile snapshot loading from flat CSV/JSON exports."""

from .loaders import load_profiles, profiles_from_frame, profile_from_row
from .synthetic import create_synthetic_frame, create_synthetic_profiles

__all__ = [
    "load_profiles",
    "profiles_from_frame",
    "profile_from_row",
    "create_synthetic_frame",
    "create_synthetic_profiles",
]
