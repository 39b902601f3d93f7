"""
Contact scoring service - applies the scorers to contact records and runs
batch rescoring sweeps.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date

from netcoach.features.prioritization.domain.models import (
    CareerGoalProfile,
    Contact,
    RelevanceWeights,
    ScoreResult,
)
from netcoach.features.prioritization.pipeline.tracking.service import (
    WarmthTransitionTracker,
    warmth_transition_tracker,
)
from netcoach.infrastructure.observability.logging import get_logger, log_batch_outcome

from .scorers import score_priority, score_relevance, score_warmth

logger = get_logger(__name__)

_SCORE_FIELDS = (
    "warmth_score",
    "warmth_bucket",
    "relevance_score",
    "relevance_bucket",
    "overall_priority_score",
    "overall_priority_bucket",
)


@dataclass(frozen=True, slots=True)
class ContactScores:
    warmth: ScoreResult
    relevance: ScoreResult
    priority: ScoreResult


@dataclass(slots=True)
class SweepResult:
    updated: list[Contact] = field(default_factory=list)
    unchanged: int = 0
    reactivations: int = 0
    failures: list[tuple[str | None, str]] = field(default_factory=list)

    @property
    def updated_count(self) -> int:
        return len(self.updated)


class ContactScoringService:
    """
    Scores contacts with a single injected set of default relevance weights.

    Without injected weights, the configured settings defaults apply.
    """

    def __init__(
        self,
        default_weights: RelevanceWeights | None = None,
        tracker: WarmthTransitionTracker = warmth_transition_tracker,
    ):
        self.default_weights = default_weights
        self.tracker = tracker

    def _weights(
        self, weights: RelevanceWeights | Mapping[str, float] | None
    ) -> RelevanceWeights | Mapping[str, float] | None:
        return self.default_weights if weights is None else weights

    def score_contact(
        self,
        contact: Contact,
        profile: CareerGoalProfile | None,
        weights: RelevanceWeights | Mapping[str, float] | None = None,
        today: date | None = None,
    ) -> ContactScores:
        """Warmth, relevance and priority for one contact."""
        warmth = score_warmth(contact.last_activity, today=today)
        relevance = score_relevance(contact, profile, self._weights(weights))
        priority = score_priority(relevance.score, warmth.score)
        return ContactScores(warmth=warmth, relevance=relevance, priority=priority)

    def score_new_contact(
        self,
        contact: Contact,
        profile: CareerGoalProfile | None,
        epoch_start: date | None,
        weights: RelevanceWeights | Mapping[str, float] | None = None,
        today: date | None = None,
    ) -> Contact:
        """
        Fill every score field on a contact that is about to be created.

        The warmth history is started from an empty state, so a new contact
        is never counted as a reactivation.
        """
        scores = self.score_contact(contact, profile, weights, today)
        update = self.tracker.track_warmth_change(
            None, scores.warmth.bucket, scores.warmth.score, epoch_start, as_of=today
        )
        return _with_scores(update.apply_to(contact), scores)

    def rescore_relevance(
        self,
        contact: Contact,
        profile: CareerGoalProfile | None,
        weights: RelevanceWeights | Mapping[str, float] | None = None,
    ) -> Contact:
        """
        Recompute relevance and priority after profile enrichment, keeping the
        stored warmth score.
        """
        relevance = score_relevance(contact, profile, self._weights(weights))
        priority = score_priority(relevance.score, contact.warmth_score or 0)
        return dataclasses.replace(
            contact,
            relevance_score=relevance.score,
            relevance_bucket=relevance.bucket,
            overall_priority_score=priority.score,
            overall_priority_bucket=priority.bucket,
        )

    def sweep(
        self,
        contacts: Iterable[Contact],
        profile: CareerGoalProfile | None,
        epoch_start: date | None = None,
        weights: RelevanceWeights | Mapping[str, float] | None = None,
        today: date | None = None,
    ) -> SweepResult:
        """
        Rescore a contact collection and report the contacts whose scores changed.

        Args:
            contacts: Stored contacts
            profile: User's career goals (None gives neutral relevance)
            epoch_start: Badge epoch start for reactivation credit
            weights: Per-user relevance weight overrides
            today: Reference date for warmth

        Returns:
            SweepResult with updated contact copies and per-contact failures

        Note:
            One contact's bad data never aborts the sweep; the failure is
            logged and recorded, and the remaining contacts are still scored.
        """
        today = today or date.today()
        result = SweepResult()
        total = 0

        for contact in contacts:
            total += 1
            try:
                scores = self.score_contact(contact, profile, weights, today)
                update = self.tracker.track_warmth_change(
                    contact, scores.warmth.bucket, scores.warmth.score, epoch_start, as_of=today
                )
                rescored = _with_scores(update.apply_to(contact), scores)
            except Exception as exc:
                logger.warning(
                    "Failed to rescore contact",
                    contact_id=contact.id,
                    error=str(exc),
                )
                result.failures.append((contact.id, str(exc)))
                continue

            if update.is_reactivation:
                result.reactivations += 1
            if _scores_changed(contact, rescored):
                result.updated.append(rescored)
            else:
                result.unchanged += 1

        log_batch_outcome(
            "contact_sweep",
            total=total,
            succeeded=total - len(result.failures),
            failed=len(result.failures),
            updated_count=result.updated_count,
            reactivations=result.reactivations,
        )
        return result


def _with_scores(contact: Contact, scores: ContactScores) -> Contact:
    return dataclasses.replace(
        contact,
        warmth_score=scores.warmth.score,
        warmth_bucket=scores.warmth.bucket,
        relevance_score=scores.relevance.score,
        relevance_bucket=scores.relevance.bucket,
        overall_priority_score=scores.priority.score,
        overall_priority_bucket=scores.priority.bucket,
    )


def _scores_changed(before: Contact, after: Contact) -> bool:
    return any(getattr(before, name) != getattr(after, name) for name in _SCORE_FIELDS)


contact_scoring_service = ContactScoringService()
