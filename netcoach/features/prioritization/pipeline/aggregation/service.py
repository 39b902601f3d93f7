"""
Interaction merge service.

Folds heterogeneous interaction batches (connections, messages,
invitations, endorsements, recommendations) into one record per person,
keyed by lower-cased ``first_last`` name, then admits the merged people
that are not already in the user's contact collection.

Two different people who share a normalized name collapse into one
record: the first connection seen for a key absorbs every later
interaction matched to that key.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date
from functools import reduce
from types import MappingProxyType

from netcoach.features.prioritization.domain.models import (
    CareerGoalProfile,
    Contact,
    Interaction,
    RelevanceWeights,
    normalized_name_key,
)
from netcoach.features.prioritization.domain.thresholds import COLD, HIGH
from netcoach.features.prioritization.pipeline.scoring.service import (
    ContactScoringService,
    contact_scoring_service,
)
from netcoach.infrastructure.observability.logging import get_logger

from .batches import (
    ConnectionBatch,
    EndorsementBatch,
    InteractionBatch,
    InvitationBatch,
    MessageBatch,
    RecommendationBatch,
)

logger = get_logger(__name__)

STRONG = 3
MEDIUM = 2
LIGHT = 1


@dataclass(frozen=True, slots=True)
class MergedContact:
    """Immutable per-person accumulator produced by the fold."""

    key: str
    first_name: str
    last_name: str
    email: str | None = None
    current_company: str | None = None
    current_title: str | None = None
    profile_url: str | None = None
    connected_on: date | None = None
    last_interaction_date: date | None = None
    interactions: tuple[Interaction, ...] = ()

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def with_interaction(self, interaction: Interaction) -> MergedContact:
        last = self.last_interaction_date
        if interaction.date is not None and (last is None or interaction.date > last):
            last = interaction.date
        return dataclasses.replace(
            self,
            interactions=self.interactions + (interaction,),
            last_interaction_date=last,
        )


@dataclass(frozen=True, slots=True)
class ImportedInteraction:
    contact_key: str
    contact_name: str
    interaction: Interaction


@dataclass(slots=True)
class ImportResult:
    contacts: list[Contact] = field(default_factory=list)
    interactions: list[ImportedInteraction] = field(default_factory=list)
    duplicates_skipped: int = 0

    @property
    def high_relevance(self) -> int:
        return sum(1 for c in self.contacts if c.relevance_bucket == HIGH)

    @property
    def warm_contacts(self) -> int:
        return sum(1 for c in self.contacts if c.warmth_bucket != COLD)


def _key_from_full_name(name: str | None) -> str | None:
    if not name:
        return None
    parts = name.split()
    if len(parts) < 2:
        return None
    return normalized_name_key(parts[0], parts[-1])


def _interaction_events(batch: InteractionBatch) -> Iterator[tuple[str, Interaction]]:
    """Yield (name key, interaction) pairs for a non-connection batch."""
    if isinstance(batch, MessageBatch):
        for row in batch.rows:
            for name in (row.sender, row.recipient):
                key = _key_from_full_name(name)
                if key:
                    yield key, Interaction(type="direct_message", date=row.date, strength=STRONG)

    elif isinstance(batch, InvitationBatch):
        for row in batch.rows:
            kind = "invitation_sent" if (row.direction or "").upper() == "OUTGOING" else "invitation_received"
            for name in (row.sender, row.recipient):
                key = _key_from_full_name(name)
                if key:
                    yield key, Interaction(type=kind, date=row.sent_at, strength=LIGHT)

    elif isinstance(batch, EndorsementBatch):
        kind = "endorsement_received" if batch.kind == "endorsements_received" else "endorsement_given"
        for row in batch.rows:
            if not row.first_name or not row.last_name:
                continue
            yield normalized_name_key(row.first_name, row.last_name), Interaction(
                type=kind,
                date=row.endorsement_date,
                strength=MEDIUM,
                metadata={"skill": row.skill_name},
            )

    elif isinstance(batch, RecommendationBatch):
        kind = (
            "recommendation_received"
            if batch.kind == "recommendations_received"
            else "recommendation_given"
        )
        for row in batch.rows:
            if not row.first_name or not row.last_name:
                continue
            yield normalized_name_key(row.first_name, row.last_name), Interaction(
                type=kind, date=row.creation_date, strength=STRONG
            )


def _fold_connections(
    acc: Mapping[str, MergedContact], batch: ConnectionBatch
) -> Mapping[str, MergedContact]:
    merged = dict(acc)
    for row in batch.rows:
        if not row.first_name or not row.last_name:
            continue
        key = normalized_name_key(row.first_name, row.last_name)
        if key in merged:
            continue
        merged[key] = MergedContact(
            key=key,
            first_name=row.first_name,
            last_name=row.last_name,
            email=row.email,
            current_company=row.company,
            current_title=row.position,
            profile_url=row.url,
            connected_on=row.connected_on,
            last_interaction_date=row.connected_on,
        )
    return MappingProxyType(merged)


def _fold_interactions(
    acc: Mapping[str, MergedContact], batch: InteractionBatch
) -> Mapping[str, MergedContact]:
    merged = dict(acc)
    for key, interaction in _interaction_events(batch):
        contact = merged.get(key)
        # Interactions with people who are not connections are dropped
        if contact is not None:
            merged[key] = contact.with_interaction(interaction)
    return MappingProxyType(merged)


def _fold_batch(
    acc: Mapping[str, MergedContact], batch: InteractionBatch
) -> Mapping[str, MergedContact]:
    if isinstance(batch, ConnectionBatch):
        return _fold_connections(acc, batch)
    return _fold_interactions(acc, batch)


class InteractionMergeService:
    def __init__(self, scoring: ContactScoringService = contact_scoring_service):
        self.scoring = scoring

    def merge(self, batches: Iterable[InteractionBatch]) -> Mapping[str, MergedContact]:
        """
        Merge interaction batches into one read-only record per name key.

        Connections are folded before any other batch regardless of input order,
        since only connections create records.
        """
        batches = list(batches)
        ordered = [b for b in batches if isinstance(b, ConnectionBatch)] + [
            b for b in batches if not isinstance(b, ConnectionBatch)
        ]
        return reduce(_fold_batch, ordered, MappingProxyType({}))

    def admit_contacts(
        self,
        merged: Mapping[str, MergedContact],
        existing: Iterable[Contact],
        profile: CareerGoalProfile | None,
        epoch_start: date | None,
        weights: RelevanceWeights | Mapping[str, float] | None = None,
        today: date | None = None,
    ) -> ImportResult:
        """
        Turn merged records into scored contacts, skipping people already stored.

        Args:
            merged: Output of merge()
            existing: The user's current contacts (read once, up front)
            profile: Career goals used for relevance
            epoch_start: Badge epoch start for warmth tracking
            weights: Relevance weight overrides
            today: Reference date for warmth

        Returns:
            ImportResult with new contacts and their interactions

        Note:
            A merged person is a duplicate when their name key matches an
            existing contact, or their email matches one case-insensitively.
        """
        existing = list(existing)
        existing_names = {contact.name_key for contact in existing}
        existing_emails = {contact.email.lower() for contact in existing if contact.email}

        result = ImportResult()
        for key, record in merged.items():
            if key in existing_names:
                result.duplicates_skipped += 1
                continue
            if record.email and record.email.lower() in existing_emails:
                result.duplicates_skipped += 1
                continue

            contact = Contact(
                id=None,
                first_name=record.first_name,
                last_name=record.last_name,
                email=record.email,
                current_company=record.current_company,
                current_title=record.current_title,
                profile_url=record.profile_url,
                connected_on=record.connected_on,
                last_interaction_date=record.last_interaction_date,
                total_interactions=len(record.interactions),
            )
            result.contacts.append(
                self.scoring.score_new_contact(contact, profile, epoch_start, weights, today)
            )
            result.interactions.extend(
                ImportedInteraction(contact_key=key, contact_name=record.full_name, interaction=i)
                for i in record.interactions
            )

        logger.info(
            "Imported contacts admitted",
            merged_count=len(merged),
            admitted=len(result.contacts),
            interactions=len(result.interactions),
            duplicates_skipped=result.duplicates_skipped,
        )
        return result

    def import_contacts(
        self,
        batches: Iterable[InteractionBatch],
        existing: Iterable[Contact],
        profile: CareerGoalProfile | None,
        epoch_start: date | None,
        weights: RelevanceWeights | Mapping[str, float] | None = None,
        today: date | None = None,
    ) -> ImportResult:
        return self.admit_contacts(
            self.merge(batches), existing, profile, epoch_start, weights, today
        )


interaction_merge_service = InteractionMergeService()
