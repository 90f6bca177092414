"""
Input records for the ranking core.

Profiles arrive as read-only snapshots from the storage layer. Everything
here is a frozen dataclass: the core annotates by building new records and
never edits the ones it was given.

Array-valued attributes (interests, seeking genders, connection modes) are
typed frozensets. Decoding them from whatever storage format they were kept
in happens before records reach this module (see matchfeed.data_loading).
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Optional, Dict, Any, FrozenSet, Iterable

from ..errors import MalformedInputError


class ConnectionMode(Enum):
    """Relationship intent a profile can flag."""
    DATING = "dating"
    CASUAL = "casual"
    PROFESSIONAL = "professional"
    PLATONIC = "platonic"


BIG_FIVE_TRAITS = (
    "openness",
    "conscientiousness",
    "extraversion",
    "agreeableness",
    "neuroticism",
)


def _as_frozenset(values: Optional[Iterable]) -> FrozenSet:
    if values is None:
        return frozenset()
    if isinstance(values, str):
        return frozenset([values])
    return frozenset(values)


def _as_modes(values: Optional[Iterable]) -> FrozenSet[ConnectionMode]:
    return frozenset(
        v if isinstance(v, ConnectionMode) else ConnectionMode(v)
        for v in _as_frozenset(values)
    )


@dataclass(frozen=True)
class ProfileDetails:
    """
    Lifestyle and personality attributes of one profile.

    Attributes:
        height_cm: Height in centimetres
        smoking_status: e.g. "never", "occasionally", "regularly"
        drinking_frequency: e.g. "never", "socially", "regularly"
        drug_use: e.g. "never", "occasionally"
        education_level: e.g. "bachelor degree" (see preferences.EDUCATION_LEVELS)
        occupation: Free-text occupation
        has_children_number: Number of children the person has
        religion: Religion tag
        political_views: Political views tag
        openness .. neuroticism: Big Five scores on a 1-10 scale
        interests: Set of interest tags
        communication_preference: e.g. "texting", "calling", "in person"
    """
    height_cm: Optional[float] = None
    smoking_status: Optional[str] = None
    drinking_frequency: Optional[str] = None
    drug_use: Optional[str] = None
    education_level: Optional[str] = None
    occupation: Optional[str] = None
    has_children_number: int = 0
    religion: Optional[str] = None
    political_views: Optional[str] = None
    openness: Optional[float] = None
    conscientiousness: Optional[float] = None
    extraversion: Optional[float] = None
    agreeableness: Optional[float] = None
    neuroticism: Optional[float] = None
    interests: FrozenSet[str] = field(default_factory=frozenset)
    communication_preference: Optional[str] = None

    def __post_init__(self):
        """Normalize collections and validate Big Five bounds."""
        object.__setattr__(self, "interests", _as_frozenset(self.interests))
        for trait in BIG_FIVE_TRAITS:
            val = getattr(self, trait)
            if val is not None and not 1 <= val <= 10:
                raise MalformedInputError(
                    f"{trait} must be between 1 and 10, got {val}", field=trait
                )

    @property
    def has_children(self) -> bool:
        return (self.has_children_number or 0) > 0

    def to_dict(self) -> Dict[str, Any]:
        d = {f.name: getattr(self, f.name) for f in fields(self)}
        d["interests"] = sorted(self.interests)
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProfileDetails":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass(frozen=True)
class PreferenceSet:
    """
    One viewer's tiered preferences.

    The three age bands are expected to nest (must-have inside preferred
    inside acceptable) but this is not enforced; evaluation checks the
    bands in priority order and takes the first that contains the age.

    Tolerance fields take "dealbreaker", "prefer_not", "neutral" or "ok".
    children_preference takes "dealbreaker_no", "prefer_no", "neutral",
    "prefer_yes" or "must_have".
    """
    age_min_must_have: Optional[float] = None
    age_max_must_have: Optional[float] = None
    age_min_preferred: Optional[float] = None
    age_max_preferred: Optional[float] = None
    age_min_acceptable: Optional[float] = None
    age_max_acceptable: Optional[float] = None
    seeking_genders: FrozenSet[str] = field(default_factory=frozenset)
    height_min_cm: Optional[float] = None
    height_max_cm: Optional[float] = None
    smoking_tolerance: Optional[str] = None
    drinking_tolerance: Optional[str] = None
    drugs_tolerance: Optional[str] = None
    children_preference: Optional[str] = None
    education_level_min: Optional[str] = None
    career_importance: Optional[str] = None
    religion_importance: Optional[str] = None
    religion_compatibility_required: bool = False
    political_importance: Optional[str] = None
    political_compatibility_required: bool = False

    def __post_init__(self):
        object.__setattr__(self, "seeking_genders", _as_frozenset(self.seeking_genders))
        object.__setattr__(
            self, "religion_compatibility_required", bool(self.religion_compatibility_required)
        )
        object.__setattr__(
            self, "political_compatibility_required", bool(self.political_compatibility_required)
        )

    def to_dict(self) -> Dict[str, Any]:
        d = {f.name: getattr(self, f.name) for f in fields(self)}
        d["seeking_genders"] = sorted(self.seeking_genders)
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PreferenceSet":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass(frozen=True)
class Profile:
    """
    Read-only snapshot of one user as seen by the ranking core.

    Attributes:
        user_id: Opaque identifier
        age: Age in years (required for preference evaluation)
        gender: Gender tag
        location: Free-text location
        details: Lifestyle and personality attributes
        preferences: The user's own preferences, if known
        connection_modes: Connection modes the user is open to
        likes_received_this_week: Weekly likes received (popularity signal)
        likes_given_this_week: Weekly likes given
        swipes_this_week: Weekly swipe count
        total_matches: Lifetime match count
        visibility_score: Exposure multiplier from the last recompute
        platform_average_likes_per_week: Average attached by the last recompute
    """
    user_id: str
    age: Optional[float] = None
    gender: Optional[str] = None
    location: Optional[str] = None
    details: ProfileDetails = field(default_factory=ProfileDetails)
    preferences: Optional[PreferenceSet] = None
    connection_modes: FrozenSet[ConnectionMode] = field(default_factory=frozenset)
    likes_received_this_week: int = 0
    likes_given_this_week: int = 0
    swipes_this_week: int = 0
    total_matches: int = 0
    visibility_score: float = 1.0
    platform_average_likes_per_week: Optional[float] = None

    def __post_init__(self):
        """Accept plain dicts and strings for nested fields."""
        if isinstance(self.details, dict):
            object.__setattr__(self, "details", ProfileDetails.from_dict(self.details))
        if isinstance(self.preferences, dict):
            object.__setattr__(self, "preferences", PreferenceSet.from_dict(self.preferences))
        object.__setattr__(self, "connection_modes", _as_modes(self.connection_modes))

    def seeks(self, mode: ConnectionMode) -> bool:
        return mode in self.connection_modes

    def require_preferences(self) -> PreferenceSet:
        """Return the preference set, failing loudly if there is none."""
        if self.preferences is None:
            raise MalformedInputError(
                f"Profile {self.user_id} has no preferences",
                field="preferences",
                user_id=self.user_id,
            )
        return self.preferences

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with JSON-friendly values."""
        return {
            "user_id": self.user_id,
            "age": self.age,
            "gender": self.gender,
            "location": self.location,
            "details": self.details.to_dict(),
            "preferences": self.preferences.to_dict() if self.preferences else None,
            "connection_modes": sorted(m.value for m in self.connection_modes),
            "likes_received_this_week": self.likes_received_this_week,
            "likes_given_this_week": self.likes_given_this_week,
            "swipes_this_week": self.swipes_this_week,
            "total_matches": self.total_matches,
            "visibility_score": self.visibility_score,
            "platform_average_likes_per_week": self.platform_average_likes_per_week,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Profile":
        """Create from dictionary (the shape produced by to_dict)."""
        if "user_id" not in data or data["user_id"] is None:
            raise MalformedInputError("Profile record is missing user_id", field="user_id")

        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}
        if kwargs.get("details") is None:
            kwargs.pop("details", None)
        return cls(**kwargs)
