"""
Weekly planning package.

Selects which contacts to reach out to each week and tracks plan completion.
"""

from .service import (
    CHECK_IN_ACTION,
    RECONNECT_ACTION,
    ROLLOVER_ACTION,
    WeeklyPlanSelection,
    WeeklyPlanService,
    weekly_plan_service,
)

__all__ = [
    "CHECK_IN_ACTION",
    "RECONNECT_ACTION",
    "ROLLOVER_ACTION",
    "WeeklyPlanSelection",
    "WeeklyPlanService",
    "weekly_plan_service",
]
