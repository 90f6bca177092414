"""Inverse-popularity visibility weighting."""

from .model import VisibilityModel, platform_average_likes

__all__ = ["VisibilityModel", "platform_average_likes"]
