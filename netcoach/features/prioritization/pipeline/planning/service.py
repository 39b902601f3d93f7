"""
Weekly outreach plan selection.

Ranks the contact collection with a selection-time heuristic (separate
from the stored overall priority), carries unfinished contacts over from
earlier active weeks, and builds the plan for the requested week.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date

from netcoach.config import settings
from netcoach.features.prioritization.domain.dates import days_since, week_start_for
from netcoach.features.prioritization.domain.errors import InvalidInputError
from netcoach.features.prioritization.domain.models import (
    CareerGoalProfile,
    Contact,
    PlannedContact,
    WeeklyPlan,
)
from netcoach.features.prioritization.domain.thresholds import COLD, HIGH, HOT, MEDIUM, WARM
from netcoach.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

ROLLOVER_ACTION = "Rollover: follow up from last week"
RECONNECT_ACTION = "Send reconnection message"
CHECK_IN_ACTION = "Check in and share value"


@dataclass(slots=True)
class WeeklyPlanSelection:
    plan: WeeklyPlan
    missed_plans: list[WeeklyPlan] = field(default_factory=list)
    replaced_plan: WeeklyPlan | None = None

    @property
    def rollover_contact_ids(self) -> set[str]:
        return {
            entry.contact_id
            for entry in self.plan.planned_contacts
            if entry.suggested_action == ROLLOVER_ACTION
        }


class WeeklyPlanService:
    ROLLOVER_BOOST = 1000
    RECENT_CONTACT_DAYS = 30
    LAPSING_CONTACT_DAYS = 60

    @staticmethod
    def capacity_for(profile: CareerGoalProfile | None) -> int:
        """Weekly plan size from the career profile, or the configured default."""
        if profile is None or not profile.weekly_networking_capacity:
            return settings.DEFAULT_WEEKLY_CAPACITY
        return profile.weekly_networking_capacity

    def select_weekly_plan(
        self,
        contacts: Iterable[Contact],
        prior_plans: Iterable[WeeklyPlan],
        weekly_capacity: int,
        week_start: date,
        today: date | None = None,
    ) -> WeeklyPlanSelection:
        """
        Build this week's outreach plan.

        Args:
            contacts: Current contact collection, in the caller's display order
            prior_plans: Every stored plan for the user
            weekly_capacity: Maximum planned contacts
            week_start: Any day of the target week (normalized to Monday)
            today: Reference date for recency (defaults to today)

        Returns:
            WeeklyPlanSelection with the new plan, the prior plans closed as
            "missed", and the discarded plan for the same week if one existed

        Raises:
            InvalidInputError: If weekly_capacity is not an integer
        """
        if isinstance(weekly_capacity, bool) or not isinstance(weekly_capacity, int):
            raise InvalidInputError(f"Weekly capacity must be an integer, got {weekly_capacity!r}")

        week_start = week_start_for(week_start)
        today = today or date.today()
        prior_plans = list(prior_plans)

        replaced_plan = next((p for p in prior_plans if p.week_start_date == week_start), None)

        rollover_ids: set[str] = set()
        missed_plans: list[WeeklyPlan] = []
        for plan in prior_plans:
            if plan.status != "active" or plan.week_start_date == week_start:
                continue
            for entry in plan.planned_contacts:
                if not entry.completed:
                    rollover_ids.add(entry.contact_id)
            missed_plans.append(dataclasses.replace(plan, status="missed"))

        candidates = _dedupe(contacts)
        ranked = sorted(
            candidates,
            key=lambda c: self._selection_score(c, rollover_ids, today),
            reverse=True,
        )
        selected = ranked[: max(weekly_capacity, 0)]

        plan = WeeklyPlan(
            week_start_date=week_start,
            target_contacts=weekly_capacity,
            planned_contacts=[
                PlannedContact(
                    contact_id=contact.id,
                    suggested_action=self._suggested_action(contact, rollover_ids),
                )
                for contact in selected
            ],
            completed_contacts=0,
            status="active",
        )

        logger.info(
            "Weekly plan generated",
            week_start=week_start.isoformat(),
            capacity=weekly_capacity,
            selected=len(plan.planned_contacts),
            rollover_count=len(rollover_ids),
            missed_plans=len(missed_plans),
            replaced=replaced_plan is not None,
        )
        return WeeklyPlanSelection(plan=plan, missed_plans=missed_plans, replaced_plan=replaced_plan)

    def _selection_score(self, contact: Contact, rollover_ids: set[str], today: date) -> int:
        score = 0
        if contact.id in rollover_ids:
            score += self.ROLLOVER_BOOST

        if contact.relevance_bucket == HIGH:
            score += 100
        elif contact.relevance_bucket == MEDIUM:
            score += 50

        # Cold but highly relevant contacts are the best re-engagement targets
        if contact.warmth_bucket == COLD and contact.relevance_bucket == HIGH:
            score += 50
        elif contact.warmth_bucket == WARM:
            score += 30
        elif contact.warmth_bucket == HOT:
            score += 10

        if contact.last_interaction_date is not None:
            days = days_since(contact.last_interaction_date, today)
            if days < self.RECENT_CONTACT_DAYS:
                score -= 50
            elif days < self.LAPSING_CONTACT_DAYS:
                score -= 20
            else:
                score += 20
        else:
            score += 20
        return score

    @staticmethod
    def _suggested_action(contact: Contact, rollover_ids: set[str]) -> str:
        if contact.id in rollover_ids:
            return ROLLOVER_ACTION
        if contact.warmth_bucket == COLD:
            return RECONNECT_ACTION
        return CHECK_IN_ACTION

    @staticmethod
    def complete_planned_contact(plan: WeeklyPlan, contact_id: str) -> WeeklyPlan:
        """
        Mark one planned contact as done.

        Raises:
            InvalidInputError: If the contact is not part of the plan
        """
        if not any(entry.contact_id == contact_id for entry in plan.planned_contacts):
            raise InvalidInputError(
                f"Contact is not in the plan for {plan.week_start_date.isoformat()}",
                contact_id=contact_id,
            )

        entries = [
            dataclasses.replace(entry, completed=True) if entry.contact_id == contact_id else entry
            for entry in plan.planned_contacts
        ]
        completed = sum(1 for entry in entries if entry.completed)
        status = plan.status
        if entries and completed == len(entries):
            status = "completed"
        return dataclasses.replace(
            plan, planned_contacts=entries, completed_contacts=completed, status=status
        )

    @staticmethod
    def plan_progress_percent(plan: WeeklyPlan) -> float:
        if plan.target_contacts <= 0:
            return 0.0
        return min(plan.completed_contacts / plan.target_contacts * 100, 100.0)


def _dedupe(contacts: Iterable[Contact]) -> Sequence[Contact]:
    """First occurrence wins per id; contacts without an id are never merged."""
    seen: set[str] = set()
    unique = []
    for contact in contacts:
        if contact.id is not None:
            if contact.id in seen:
                continue
            seen.add(contact.id)
        unique.append(contact)
    return unique


weekly_plan_service = WeeklyPlanService()
