"""
Domain subpackage for contact prioritization.
"""

from .dates import days_since, parse_iso_date, week_start_for
from .errors import InvalidInputError, PrioritizationError
from .models import (
    CareerGoalProfile,
    Contact,
    Interaction,
    PlannedContact,
    RelevanceWeights,
    ScoreResult,
    WeeklyPlan,
    normalized_name_key,
)

__all__ = [
    "CareerGoalProfile",
    "Contact",
    "Interaction",
    "InvalidInputError",
    "PlannedContact",
    "PrioritizationError",
    "RelevanceWeights",
    "ScoreResult",
    "WeeklyPlan",
    "days_since",
    "normalized_name_key",
    "parse_iso_date",
    "week_start_for",
]
