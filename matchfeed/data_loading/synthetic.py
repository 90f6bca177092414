"""
Synthetic profile generation for demonstrations and load checks.

Produces a population with the same flat row layout as a real snapshot,
so it runs through the same loader path (profiles_from_frame).
"""

import json
import logging
from typing import List

import numpy as np
import pandas as pd

from ..preferences import EDUCATION_LEVELS
from ..schema import Profile
from .loaders import profiles_from_frame

logger = logging.getLogger(__name__)

GENDERS = ["male", "female", "nonbinary"]
INTERESTS = ["hiking", "reading", "cooking", "travel", "music", "movies", "gaming",
             "fitness", "yoga", "photography", "art", "dancing", "sports", "pets"]
TOLERANCES = ["dealbreaker", "prefer_not", "neutral", "ok"]
CHILDREN_PREFERENCES = ["dealbreaker_no", "prefer_no", "neutral", "prefer_yes", "must_have"]
RELIGIONS = ["agnostic", "atheist", "christian", "jewish", "muslim", "hindu", "buddhist"]
POLITICS = ["liberal", "moderate", "conservative", "apolitical"]
COMMUNICATION = ["texting", "calling", "video", "in person", "any"]


def create_synthetic_frame(n_profiles: int = 200, random_seed: int = 43) -> pd.DataFrame:
    """
    Create a DataFrame of synthetic flat user rows.

    Args:
        n_profiles: Number of rows
        random_seed: Seed for numpy RandomState

    Returns:
        DataFrame with snapshot column names
    """
    rng = np.random.RandomState(random_seed)
    ages = rng.randint(18, 60, n_profiles)
    genders = rng.choice(GENDERS, n_profiles, p=[0.45, 0.45, 0.10])

    rows = []
    for i in range(n_profiles):
        age = int(ages[i])
        gender = str(genders[i])
        seeking = ["female"] if gender == "male" else ["male"] if gender == "female" else GENDERS
        interests = rng.choice(INTERESTS, size=rng.randint(3, 8), replace=False).tolist()
        religion = str(rng.choice(RELIGIONS))

        rows.append({
            "user_id": f"user_{i:05d}",
            "age": age,
            "gender": gender,
            "location_city": "Springfield",
            "seeking_dating": int(rng.rand() < 0.8),
            "seeking_casual": int(rng.rand() < 0.3),
            "seeking_professional": int(rng.rand() < 0.15),
            "seeking_platonic": int(rng.rand() < 0.25),
            # Heavy-tailed popularity, like real engagement data
            "likes_received_week": int(rng.poisson(rng.gamma(1.5, 8.0))),
            "likes_given_week": int(rng.poisson(15)),
            "swipes_week": int(rng.poisson(60)),
            "matches_total": int(rng.poisson(5)),
            "height_cm": int(rng.randint(150, 200)),
            "smoking_status": str(rng.choice(["never", "occasionally", "regularly"], p=[0.7, 0.2, 0.1])),
            "drinking_frequency": str(rng.choice(["never", "socially", "regularly", "rarely"])),
            "drug_use": str(rng.choice(["never", "occasionally", "cannabis only"], p=[0.7, 0.15, 0.15])),
            "education_level": str(rng.choice(EDUCATION_LEVELS)),
            "has_children_number": int(rng.randint(1, 4)) if age > 25 and rng.rand() < 0.3 else 0,
            "religion": religion,
            "political_views": str(rng.choice(POLITICS)),
            "openness_score": int(rng.randint(1, 11)),
            "conscientiousness_score": int(rng.randint(1, 11)),
            "extraversion_score": int(rng.randint(1, 11)),
            "agreeableness_score": int(rng.randint(1, 11)),
            "neuroticism_score": int(rng.randint(1, 11)),
            "interests": json.dumps(interests),
            "communication_preference": str(rng.choice(COMMUNICATION)),
            "age_min_musthave": max(18, age - 10),
            "age_max_musthave": min(75, age + 10),
            "age_min_preferred": max(18, age - 7),
            "age_max_preferred": min(75, age + 7),
            "age_min_acceptable": max(18, age - 15),
            "age_max_acceptable": min(75, age + 15),
            "seeking_genders": json.dumps(seeking),
            "height_min_cm": int(rng.randint(150, 170)),
            "height_max_cm": int(rng.randint(175, 200)),
            "smoking_tolerance": str(rng.choice(TOLERANCES)),
            "drinking_tolerance": str(rng.choice(TOLERANCES)),
            "drugs_tolerance": str(rng.choice(TOLERANCES)),
            "children_preference": str(rng.choice(CHILDREN_PREFERENCES)),
            "education_level_min": str(rng.choice(EDUCATION_LEVELS[:5])),
            "career_importance": str(rng.choice(["not_important", "somewhat", "important"])),
            "religion_importance": religion,
            "religion_compatibility_required": int(rng.rand() < 0.3),
            "political_importance": str(rng.choice(POLITICS)),
            "political_compatibility_required": int(rng.rand() < 0.2),
        })

    df = pd.DataFrame(rows)
    logger.info(f"Created synthetic profile data: {n_profiles} rows")
    return df


def create_synthetic_profiles(n_profiles: int = 200, random_seed: int = 43) -> List[Profile]:
    """Synthetic population as Profile records."""
    return profiles_from_frame(create_synthetic_frame(n_profiles, random_seed))
