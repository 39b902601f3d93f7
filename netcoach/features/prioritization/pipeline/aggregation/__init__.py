"""
Aggregation package for contact imports.

Validates interaction batches and merges them into per-contact records
that are scored on admission.
"""

from .batches import InteractionBatch, parse_batch
from .service import (
    ImportedInteraction,
    ImportResult,
    InteractionMergeService,
    MergedContact,
    interaction_merge_service,
)

__all__ = [
    "ImportResult",
    "ImportedInteraction",
    "InteractionBatch",
    "InteractionMergeService",
    "MergedContact",
    "interaction_merge_service",
    "parse_batch",
]
