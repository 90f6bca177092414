"""Fringe boost for below-median candidates who match the viewer."""

from .boost import FringeBoost

__all__ = ["FringeBoost"]
