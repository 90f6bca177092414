"""
Profile snapshot loading.

Turns flat user rows (as exported from the users / profile details /
preferences join) into typed Profile records. This is the boundary where
storage encodings are undone: JSON-encoded array columns become
frozensets, 0/1 flags become booleans and connection modes, missing
cells become None. The scoring modules never see raw rows.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from ..errors import MalformedInputError
from ..schema import ConnectionMode, PreferenceSet, Profile, ProfileDetails

logger = logging.getLogger(__name__)

# Row column -> ProfileDetails field
DETAIL_COLUMNS = {
    "height_cm": "height_cm",
    "smoking_status": "smoking_status",
    "drinking_frequency": "drinking_frequency",
    "drug_use": "drug_use",
    "education_level": "education_level",
    "occupation": "occupation",
    "has_children_number": "has_children_number",
    "religion": "religion",
    "political_views": "political_views",
    "openness_score": "openness",
    "conscientiousness_score": "conscientiousness",
    "extraversion_score": "extraversion",
    "agreeableness_score": "agreeableness",
    "neuroticism_score": "neuroticism",
    "interests": "interests",
    "communication_preference": "communication_preference",
}

# Row column -> PreferenceSet field
PREFERENCE_COLUMNS = {
    "age_min_musthave": "age_min_must_have",
    "age_max_musthave": "age_max_must_have",
    "age_min_preferred": "age_min_preferred",
    "age_max_preferred": "age_max_preferred",
    "age_min_acceptable": "age_min_acceptable",
    "age_max_acceptable": "age_max_acceptable",
    "seeking_genders": "seeking_genders",
    "height_min_cm": "height_min_cm",
    "height_max_cm": "height_max_cm",
    "smoking_tolerance": "smoking_tolerance",
    "drinking_tolerance": "drinking_tolerance",
    "drugs_tolerance": "drugs_tolerance",
    "children_preference": "children_preference",
    "education_level_min": "education_level_min",
    "career_importance": "career_importance",
    "religion_importance": "religion_importance",
    "religion_compatibility_required": "religion_compatibility_required",
    "political_importance": "political_importance",
    "political_compatibility_required": "political_compatibility_required",
}

JSON_ARRAY_COLUMNS = ("interests", "seeking_genders")

COUNTER_COLUMNS = {
    "likes_received_week": "likes_received_this_week",
    "likes_given_week": "likes_given_this_week",
    "swipes_week": "swipes_this_week",
    "matches_total": "total_matches",
}


def load_profiles(filepath: str) -> List[Profile]:
    """
    Load a profile snapshot from CSV or JSON.

    Args:
        filepath: Path to a .csv or .json export (JSON as a list of row objects)

    Returns:
        List of Profile records in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or the format is unsupported
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Profile snapshot not found: {filepath}")

    logger.info(f"Loading profiles from {filepath}")
    suffix = path.suffix.lower()
    if suffix == ".csv":
        df = pd.read_csv(filepath)
    elif suffix == ".json":
        df = pd.read_json(filepath, orient="records")
    else:
        raise ValueError(f"Unsupported snapshot format: {suffix}")

    if df.empty:
        raise ValueError(f"Profile snapshot is empty: {filepath}")

    profiles = profiles_from_frame(df)
    logger.info(f"Loaded {len(profiles)} profiles")
    return profiles


def profiles_from_frame(df: pd.DataFrame) -> List[Profile]:
    """Convert a DataFrame of flat user rows into Profile records."""
    clean = df.astype(object).where(pd.notna(df), None)
    return [profile_from_row(row) for row in clean.to_dict(orient="records")]


def profile_from_row(row: Dict[str, Any]) -> Profile:
    """
    Build one Profile from a flat row.

    Raises:
        MalformedInputError: If the row has no user_id
    """
    row = {k: _native(v) for k, v in row.items()}
    user_id = row.get("user_id")
    if user_id is None:
        raise MalformedInputError("Row is missing user_id", field="user_id")

    details = {
        field: _decode_cell(column, row[column])
        for column, field in DETAIL_COLUMNS.items()
        if column in row and row[column] is not None
    }
    if "has_children_number" in details:
        details["has_children_number"] = int(details["has_children_number"])

    pref_values = {
        field: _decode_cell(column, row[column])
        for column, field in PREFERENCE_COLUMNS.items()
        if column in row and row[column] is not None
    }

    modes = [m for m in ConnectionMode if _flag(row.get(f"seeking_{m.value}"))]

    kwargs = {
        field: int(row[column])
        for column, field in COUNTER_COLUMNS.items()
        if row.get(column) is not None
    }
    if row.get("visibility_score") is not None:
        kwargs["visibility_score"] = float(row["visibility_score"])

    return Profile(
        user_id=str(user_id),
        age=row.get("age"),
        gender=row.get("gender"),
        location=_location(row),
        details=ProfileDetails(**details),
        preferences=PreferenceSet(**pref_values) if pref_values else None,
        connection_modes=frozenset(modes),
        **kwargs,
    )


def _decode_cell(column: str, value: Any) -> Any:
    if column in JSON_ARRAY_COLUMNS and isinstance(value, str):
        decoded = json.loads(value) if value.strip() else []
        if not isinstance(decoded, list):
            raise MalformedInputError(
                f"Column {column} must hold a JSON array, got {value!r}", field=column
            )
        return decoded
    return value


def _native(value: Any) -> Any:
    """Unwrap numpy scalars so records hold plain Python values."""
    if hasattr(value, "item") and not isinstance(value, (list, dict, str)):
        return value.item()
    return value


def _flag(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


def _location(row: Dict[str, Any]) -> Optional[str]:
    if row.get("location") is not None:
        return row["location"]
    parts = [row.get(c) for c in ("location_city", "location_state") if row.get(c) is not None]
    return ", ".join(str(p) for p in parts) or None
