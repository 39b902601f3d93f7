"""
Domain models for contact prioritization.

Plain dataclasses shaped like the records the storage layer hands us.
They carry no scoring logic so they can be reused by every pipeline stage.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Literal

from .thresholds import PriorityBucket, RelevanceBucket, WarmthBucket

PlanStatus = Literal["active", "completed", "missed"]


def normalized_name_key(first_name: str | None, last_name: str | None) -> str:
    """Lower-cased ``first_last`` key used to match people across import batches."""
    return f"{(first_name or '').lower()}_{(last_name or '').lower()}"


@dataclass(slots=True)
class Contact:
    """A person the user has a relationship with, including stored scores."""

    id: str | None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    industry: str | None = None
    current_title: str | None = None
    headline: str | None = None
    current_company: str | None = None
    past_companies: list[str] = field(default_factory=list)
    location: str | None = None
    skills: list[str] = field(default_factory=list)
    profile_url: str | None = None
    connected_on: date | None = None
    last_interaction_date: date | None = None
    total_interactions: int = 0
    warmth_score: int | None = None
    warmth_bucket: WarmthBucket | None = None
    previous_warmth_bucket: WarmthBucket | None = None
    last_warmth_change_at: date | None = None
    reactivated_at: date | None = None
    relevance_score: int | None = None
    relevance_bucket: RelevanceBucket | None = None
    overall_priority_score: int | None = None
    overall_priority_bucket: PriorityBucket | None = None

    @property
    def name_key(self) -> str:
        return normalized_name_key(self.first_name, self.last_name)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @property
    def last_activity(self) -> date | None:
        return self.last_interaction_date or self.connected_on


@dataclass(slots=True)
class CareerGoalProfile:
    """The user's targeting criteria. Owned by the settings flow, read-only here."""

    target_industries: list[str] = field(default_factory=list)
    dream_roles: list[str] = field(default_factory=list)
    preferred_locations: list[str] = field(default_factory=list)
    wishlist_companies: list[str] = field(default_factory=list)
    target_skills: list[str] = field(default_factory=list)
    weekly_networking_capacity: int = 5


@dataclass(frozen=True, slots=True)
class RelevanceWeights:
    """
    Per-factor relevance weights. A zero weight removes the factor entirely.

    Defaults come from Settings.default_relevance_weights().
    """

    industry: float
    role: float
    location: float
    company: float
    skills: float

    @classmethod
    def from_mapping(cls, values: dict[str, float] | None) -> "RelevanceWeights | None":
        """
        Build weights from a stored override mapping.

        Factors missing from a supplied mapping count as weight 0, matching how
        partial overrides are saved by the settings screen.
        """
        if values is None:
            return None
        return cls(
            industry=values.get("industry", 0) or 0,
            role=values.get("role", 0) or 0,
            location=values.get("location", 0) or 0,
            company=values.get("company", 0) or 0,
            skills=values.get("skills", 0) or 0,
        )


@dataclass(frozen=True, slots=True)
class ScoreResult:
    score: int
    bucket: str


@dataclass(frozen=True, slots=True)
class Interaction:
    """Single timestamped touchpoint. ``strength``: 1 light, 2 medium, 3 strong."""

    type: str
    date: date | None
    strength: int
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class PlannedContact:
    contact_id: str
    suggested_action: str
    completed: bool = False


@dataclass(slots=True)
class WeeklyPlan:
    """One week's outreach selection."""

    week_start_date: date
    target_contacts: int
    planned_contacts: list[PlannedContact] = field(default_factory=list)
    completed_contacts: int = 0
    status: PlanStatus = "active"
    id: str | None = None
