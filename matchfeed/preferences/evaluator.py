"""
Bullseye preference evaluation.

Scores one candidate against one viewer's tiered preferences. Each
dimension adds a signed weight from the tier table and the summed score is
then classified into a tier:

    Tier weights (defaults):  MUST_HAVE +100, PREFERRED +50,
                              ACCEPTABLE +25, OUTSIDE -10

    Dimension        hit                  miss
    ---------        ---                  ----
    age              band tier weight     OUTSIDE
    gender           MUST_HAVE            OUTSIDE * 2   (dealbreaker)
    height           PREFERRED            OUTSIDE / 2   (minor)
    smoking/drinking/drugs  ACCEPTABLE    OUTSIDE       (dealbreaker)
    children         PREFERRED/ACCEPTABLE OUTSIDE       (dealbreaker)
    education        ACCEPTABLE           OUTSIDE / 2   (minor)
    religion/politics PREFERRED           OUTSIDE       (important)

    total >= 2 * MUST_HAVE -> MUST_HAVE
    total >= PREFERRED     -> PREFERRED
    total >= ACCEPTABLE    -> ACCEPTABLE
    otherwise              -> OUTSIDE

The relation is directional: evaluate(b, a.preferences) says how well b
fits a's wishes and nothing about the reverse.
"""

import logging
from typing import List, Optional, Tuple

from ..configs import MatchingConfig, DEFAULT_CONFIG
from ..errors import MalformedInputError
from ..schema import (
    MismatchSeverity,
    PreferenceMatchResult,
    PreferenceMismatch,
    PreferenceSet,
    PreferenceTier,
    Profile,
    ProfileDetails,
)

logger = logging.getLogger(__name__)

# Ordinal scale. "trade school" sits after doctorate; that is the
# production ordering and is kept as-is until product decides otherwise.
EDUCATION_LEVELS = (
    "high school",
    "some college",
    "associate degree",
    "bachelor degree",
    "master degree",
    "doctorate",
    "trade school",
)


def education_index(level: Optional[str]) -> int:
    """Position on the education scale, -1 for unknown levels."""
    try:
        return EDUCATION_LEVELS.index(level)
    except ValueError:
        return -1


def _in_band(age: float, low: Optional[float], high: Optional[float]) -> bool:
    if low is None or high is None:
        return False
    return low <= age <= high


def evaluate_age_tier(age: float, preferences: PreferenceSet) -> PreferenceTier:
    """
    Place an age into the viewer's bullseye bands.

    Bands are checked must-have first, then preferred, then acceptable; the
    first band containing the age (bounds inclusive) wins. Bands that are
    not nested are not corrected.
    """
    if _in_band(age, preferences.age_min_must_have, preferences.age_max_must_have):
        return PreferenceTier.MUST_HAVE
    if _in_band(age, preferences.age_min_preferred, preferences.age_max_preferred):
        return PreferenceTier.PREFERRED
    if _in_band(age, preferences.age_min_acceptable, preferences.age_max_acceptable):
        return PreferenceTier.ACCEPTABLE
    return PreferenceTier.OUTSIDE


class _Tally:
    """Running score with the contributions and mismatches that built it."""

    def __init__(self):
        self.contributions: List[Tuple[str, float]] = []
        self.mismatches: List[PreferenceMismatch] = []

    def add(self, dimension: str, weight: float, severity: MismatchSeverity = None) -> None:
        self.contributions.append((dimension, weight))
        if severity is not None:
            self.mismatches.append(PreferenceMismatch(field=dimension, severity=severity))

    @property
    def score(self) -> float:
        return sum(w for _, w in self.contributions)


class PreferenceEvaluator:
    """
    Scores a candidate against a viewer's preference set.

    Attributes:
        config: MatchingConfig providing the tier weights
    """

    def __init__(self, config: Optional[MatchingConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.weights = self.config.preference_weights

    def evaluate(self, candidate: Profile, preferences: PreferenceSet) -> PreferenceMatchResult:
        """
        Evaluate how well a candidate matches a viewer's preferences.

        Args:
            candidate: Profile being evaluated
            preferences: The viewer's preference set

        Returns:
            PreferenceMatchResult with tier, score, mismatches and contributions

        Raises:
            MalformedInputError: If the candidate has no age
        """
        if candidate.age is None:
            raise MalformedInputError(
                f"Candidate {candidate.user_id} has no age; cannot place it in an age band",
                field="age",
                user_id=candidate.user_id,
            )

        tally = _Tally()
        details = candidate.details

        self._evaluate_age(candidate.age, preferences, tally)
        self._evaluate_gender(candidate.gender, preferences, tally)
        self._evaluate_height(details, preferences, tally)
        self._evaluate_lifestyle(details, preferences, tally)
        self._evaluate_children(details, preferences, tally)
        self._evaluate_education(details, preferences, tally)
        self._evaluate_beliefs(details, preferences, tally)

        score = tally.score
        tier = self.classify(score)
        logger.debug(f"Candidate {candidate.user_id}: preference score {score}, tier {tier.value}, "
                     f"{len(tally.mismatches)} mismatches")
        return PreferenceMatchResult(
            tier=tier,
            score=score,
            mismatches=tuple(tally.mismatches),
            contributions=tuple(tally.contributions),
        )

    def classify(self, score: float) -> PreferenceTier:
        """Map a summed score onto a tier."""
        w = self.weights
        if score >= w.must_have * 2:
            return PreferenceTier.MUST_HAVE
        if score >= w.preferred:
            return PreferenceTier.PREFERRED
        if score >= w.acceptable:
            return PreferenceTier.ACCEPTABLE
        return PreferenceTier.OUTSIDE

    def tier_weight(self, tier: PreferenceTier) -> float:
        w = self.weights
        return {
            PreferenceTier.MUST_HAVE: w.must_have,
            PreferenceTier.PREFERRED: w.preferred,
            PreferenceTier.ACCEPTABLE: w.acceptable,
            PreferenceTier.OUTSIDE: w.outside,
        }[tier]

    def _evaluate_age(self, age: float, preferences: PreferenceSet, tally: _Tally) -> None:
        tier = evaluate_age_tier(age, preferences)
        severity = MismatchSeverity.OUTSIDE if tier is PreferenceTier.OUTSIDE else None
        tally.add("age", self.tier_weight(tier), severity)

    def _evaluate_gender(self, gender: Optional[str], preferences: PreferenceSet,
                         tally: _Tally) -> None:
        if gender in preferences.seeking_genders:
            tally.add("gender", self.weights.must_have)
        else:
            tally.add("gender", self.weights.outside * 2, MismatchSeverity.DEALBREAKER)

    def _evaluate_height(self, details: ProfileDetails, preferences: PreferenceSet,
                         tally: _Tally) -> None:
        if (details.height_cm is None or preferences.height_min_cm is None
                or preferences.height_max_cm is None):
            return

        if preferences.height_min_cm <= details.height_cm <= preferences.height_max_cm:
            tally.add("height", self.weights.preferred)
        else:
            tally.add("height", self.weights.outside / 2, MismatchSeverity.MINOR)

    def _evaluate_lifestyle(self, details: ProfileDetails, preferences: PreferenceSet,
                            tally: _Tally) -> None:
        w = self.weights

        # Smoking: a non-smoker is fine for everyone
        if preferences.smoking_tolerance == "dealbreaker" and details.smoking_status != "never":
            tally.add("smoking", w.outside, MismatchSeverity.DEALBREAKER)
        elif preferences.smoking_tolerance == "ok" or details.smoking_status == "never":
            tally.add("smoking", w.acceptable)

        # Drinking: only regular drinking breaks the deal
        if (preferences.drinking_tolerance == "dealbreaker"
                and details.drinking_frequency == "regularly"):
            tally.add("drinking", w.outside, MismatchSeverity.DEALBREAKER)
        elif preferences.drinking_tolerance == "ok":
            tally.add("drinking", w.acceptable)

        if preferences.drugs_tolerance == "dealbreaker" and details.drug_use != "never":
            tally.add("drugs", w.outside, MismatchSeverity.DEALBREAKER)
        elif preferences.drugs_tolerance == "ok":
            tally.add("drugs", w.acceptable)

    def _evaluate_children(self, details: ProfileDetails, preferences: PreferenceSet,
                           tally: _Tally) -> None:
        w = self.weights
        wanted = preferences.children_preference

        if wanted == "dealbreaker_no" and details.has_children:
            tally.add("children", w.outside, MismatchSeverity.DEALBREAKER)
        elif wanted == "must_have" and not details.has_children:
            tally.add("children", w.outside, MismatchSeverity.DEALBREAKER)
        elif wanted == "neutral":
            tally.add("children", w.acceptable)
        else:
            tally.add("children", w.preferred)

    def _evaluate_education(self, details: ProfileDetails, preferences: PreferenceSet,
                            tally: _Tally) -> None:
        candidate_level = education_index(details.education_level)
        min_level = education_index(preferences.education_level_min)

        if candidate_level >= min_level or preferences.career_importance == "not_important":
            tally.add("education", self.weights.acceptable)
        else:
            tally.add("education", self.weights.outside / 2, MismatchSeverity.MINOR)

    def _evaluate_beliefs(self, details: ProfileDetails, preferences: PreferenceSet,
                          tally: _Tally) -> None:
        self._evaluate_belief(
            "religion",
            details.religion,
            preferences.religion_importance,
            preferences.religion_compatibility_required,
            tally,
        )
        self._evaluate_belief(
            "politics",
            details.political_views,
            preferences.political_importance,
            preferences.political_compatibility_required,
            tally,
        )

    def _evaluate_belief(self, dimension: str, value: Optional[str], wanted: Optional[str],
                         required: bool, tally: _Tally) -> None:
        w = self.weights
        if not required:
            tally.add(dimension, w.acceptable / 2)
        elif value == wanted:
            tally.add(dimension, w.preferred)
        else:
            tally.add(dimension, w.outside, MismatchSeverity.IMPORTANT)
