"""
Badge progress derived from contact state and activity counters.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

from netcoach.features.prioritization.domain.models import Contact
from netcoach.features.prioritization.domain.thresholds import HIGH

from .service import WarmthTransitionTracker


@dataclass(frozen=True, slots=True)
class BadgeDefinition:
    id: str
    name: str
    description: str
    requirement: int


@dataclass(frozen=True, slots=True)
class BadgeProgress:
    badge: BadgeDefinition
    progress: int
    requirement: int
    earned: bool
    percent: float


def _percent(progress: int, requirement: int) -> float:
    if requirement <= 0:
        return 0.0
    return min(progress / requirement * 100, 100.0)


BADGES: tuple[BadgeDefinition, ...] = (
    BadgeDefinition("warm_up_wizard", "Warm-Up Wizard", "10+ cold contacts reactivated", 10),
    BadgeDefinition("consistency_king", "Consistency Champion", "4-week streak maintained", 28),
    BadgeDefinition("connector", "Super Connector", "20 successful interactions", 20),
    BadgeDefinition(
        "industry_hunter", "Industry Hunter", "Engaged all high-relevance contacts", 1
    ),
    BadgeDefinition("message_master", "Message Master", "50 messages sent", 50),
    BadgeDefinition("network_builder", "Network Builder", "500 total contacts", 500),
)


def compute_badge_progress(
    contacts: Iterable[Contact],
    interaction_count: int,
    current_streak: int,
    epoch_start: date | None,
    earned_badge_ids: Sequence[str] = (),
) -> list[BadgeProgress]:
    """
    Progress toward every badge in the catalogue.

    Industry Hunter is binary (all high-relevance contacts engaged). Its
    progress and requirement are reported as engaged/total, while its percent
    stays 0 until every high-relevance contact is engaged.
    """
    contacts = list(contacts)
    reactivated = WarmthTransitionTracker.count_reactivations(contacts, epoch_start)
    high_relevance = [c for c in contacts if c.relevance_bucket == HIGH]
    high_engaged = sum(1 for c in high_relevance if c.total_interactions > 0)
    hunter_done = 1 if high_relevance and high_engaged == len(high_relevance) else 0

    raw_progress = {
        "warm_up_wizard": reactivated,
        "consistency_king": current_streak,
        "connector": interaction_count,
        "industry_hunter": hunter_done,
        "message_master": interaction_count,
        "network_builder": len(contacts),
    }

    results = []
    for badge in BADGES:
        progress = raw_progress.get(badge.id, 0)
        earned = badge.id in earned_badge_ids or progress >= badge.requirement
        percent = _percent(progress, badge.requirement)
        if badge.id == "industry_hunter":
            results.append(
                BadgeProgress(
                    badge=badge,
                    progress=high_engaged,
                    requirement=len(high_relevance),
                    earned=earned,
                    percent=percent,
                )
            )
            continue
        results.append(
            BadgeProgress(
                badge=badge,
                progress=progress,
                requirement=badge.requirement,
                earned=earned,
                percent=percent,
            )
        )
    return results
