"""
Contact prioritization feature package.

Keeps every layer of the prioritization engine co-located (domain models,
scoring, warmth tracking, weekly planning and import aggregation) so the
whole flow can be read in one place.
"""

# Re-export the primary building blocks for easy access.
from .domain.models import CareerGoalProfile, Contact, RelevanceWeights, WeeklyPlan  # noqa: F401
from .pipeline.aggregation import interaction_merge_service, parse_batch  # noqa: F401
from .pipeline.planning import weekly_plan_service  # noqa: F401
from .pipeline.scoring import (  # noqa: F401
    contact_scoring_service,
    score_priority,
    score_relevance,
    score_warmth,
)
from .pipeline.tracking import compute_badge_progress, warmth_transition_tracker  # noqa: F401
