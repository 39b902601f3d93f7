"""
Contact scoring package.

Pure warmth/relevance/priority scorers plus the service that applies them
to contact records.
"""

from .scorers import score_priority, score_relevance, score_warmth
from .service import ContactScores, ContactScoringService, SweepResult, contact_scoring_service

__all__ = [
    "ContactScores",
    "ContactScoringService",
    "SweepResult",
    "contact_scoring_service",
    "score_priority",
    "score_relevance",
    "score_warmth",
]
