"""Tiered (bullseye) preference evaluation."""

from .evaluator import (
    EDUCATION_LEVELS,
    PreferenceEvaluator,
    education_index,
    evaluate_age_tier,
)

__all__ = ["EDUCATION_LEVELS", "PreferenceEvaluator", "education_index", "evaluate_age_tier"]
