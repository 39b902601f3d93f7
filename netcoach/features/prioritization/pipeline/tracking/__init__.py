"""
Warmth tracking package.

Detects cold-to-warm reactivations and derives badge progress from them.
"""

from .badges import BADGES, BadgeDefinition, BadgeProgress, compute_badge_progress
from .service import WarmthTransitionTracker, WarmthUpdate, warmth_transition_tracker

__all__ = [
    "BADGES",
    "BadgeDefinition",
    "BadgeProgress",
    "WarmthTransitionTracker",
    "WarmthUpdate",
    "compute_badge_progress",
    "warmth_transition_tracker",
]
