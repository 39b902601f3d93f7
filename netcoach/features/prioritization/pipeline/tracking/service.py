"""
Warmth transition tracking.

Shifts a contact's warmth bucket history on every recompute and detects
reactivations (cold -> warm/hot) that count toward badge progress. Credit
is only granted inside the current badge epoch, so historical data loaded
at account creation never unlocks anything.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from netcoach.features.prioritization.domain.models import Contact
from netcoach.features.prioritization.domain.thresholds import COLD, WarmthBucket
from netcoach.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class WarmthUpdate:
    """Warmth fields to write back onto a contact after a recompute."""

    warmth_bucket: WarmthBucket
    warmth_score: int
    previous_warmth_bucket: WarmthBucket | None
    last_warmth_change_at: date | None
    reactivated_at: date | None
    is_reactivation: bool = False

    def apply_to(self, contact: Contact) -> Contact:
        return dataclasses.replace(
            contact,
            warmth_bucket=self.warmth_bucket,
            warmth_score=self.warmth_score,
            previous_warmth_bucket=self.previous_warmth_bucket,
            last_warmth_change_at=self.last_warmth_change_at,
            reactivated_at=self.reactivated_at,
        )


class WarmthTransitionTracker:
    def track_warmth_change(
        self,
        contact: Contact | None,
        new_bucket: WarmthBucket,
        new_score: int,
        epoch_start: date | None,
        as_of: date | None = None,
    ) -> WarmthUpdate:
        """
        Compute the warmth history update for a freshly scored contact.

        Args:
            contact: Stored contact state, or None for a contact being created
            new_bucket: Freshly computed warmth bucket
            new_score: Freshly computed warmth score
            epoch_start: Badge epoch start; None means reactivations are never credited
            as_of: Date of the recompute (defaults to today)

        Returns:
            WarmthUpdate; ``is_reactivation`` is True only when credit is newly granted

        Note:
            A contact with no stored bucket has no cold state to recover from,
            so its first scoring is never a reactivation. A contact already
            credited inside the current epoch keeps its original stamp.
        """
        as_of = as_of or date.today()
        prior_bucket = contact.warmth_bucket if contact else None
        prior_change_at = contact.last_warmth_change_at if contact else None
        reactivated_at = contact.reactivated_at if contact else None

        changed = prior_bucket is not None and prior_bucket != new_bucket
        is_reactivation = False

        if (
            prior_bucket == COLD
            and new_bucket != COLD
            and epoch_start is not None
            and as_of >= epoch_start
        ):
            if reactivated_at is None or reactivated_at < epoch_start:
                reactivated_at = as_of
                is_reactivation = True
                logger.debug(
                    "Warmth reactivation credited",
                    contact_id=contact.id if contact else None,
                    new_bucket=new_bucket,
                )

        return WarmthUpdate(
            warmth_bucket=new_bucket,
            warmth_score=new_score,
            previous_warmth_bucket=prior_bucket,
            last_warmth_change_at=as_of if changed else prior_change_at,
            reactivated_at=reactivated_at,
            is_reactivation=is_reactivation,
        )

    @staticmethod
    def count_reactivations(contacts: Iterable[Contact], epoch_start: date | None) -> int:
        """Number of contacts credited with a reactivation inside the epoch."""
        if epoch_start is None:
            return 0
        return sum(
            1
            for contact in contacts
            if contact.reactivated_at is not None and contact.reactivated_at >= epoch_start
        )


warmth_transition_tracker = WarmthTransitionTracker()
