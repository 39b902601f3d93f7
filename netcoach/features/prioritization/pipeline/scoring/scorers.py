"""
Deterministic warmth, relevance and priority scorers.

Every function here is pure: identical inputs always give identical
outputs, and absent optional data falls back to a defined result instead
of raising.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from datetime import date, datetime

from netcoach.config import settings
from netcoach.features.prioritization.domain.dates import days_since, parse_iso_date
from netcoach.features.prioritization.domain.models import (
    CareerGoalProfile,
    Contact,
    RelevanceWeights,
    ScoreResult,
)
from netcoach.features.prioritization.domain.thresholds import (
    COLD,
    COLD_DECAY_DAYS,
    HOT,
    HOT_DECAY_DAYS,
    HOT_MAX_DAYS,
    HOT_MIN_SCORE,
    MEDIUM,
    PRIORITY_RELEVANCE_SHARE,
    PRIORITY_WARMTH_SHARE,
    WARM,
    WARM_DECAY_DAYS,
    WARM_MAX_DAYS,
    WARM_MIN_SCORE,
    priority_bucket_for_score,
    relevance_bucket_for_score,
)

NEUTRAL_RELEVANCE = ScoreResult(score=50, bucket=MEDIUM)

# Domain keywords that match a target industry against title/company text
INDUSTRY_KEYWORDS = ("health", "tech", "finance")


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative scores (Python's round() is banker's rounding)."""
    return int(math.floor(value + 0.5))


def score_warmth(
    last_interaction_date: date | datetime | str | None,
    today: date | None = None,
) -> ScoreResult:
    """
    Score relationship warmth from the most recent interaction.

    Args:
        last_interaction_date: Date of the latest touchpoint, or None if never contacted
        today: Reference date (defaults to the current local date)

    Returns:
        ScoreResult with score 0-100 and bucket hot/warm/cold

    Note:
        The bucket comes from the days-since branch, not from the score.
        Future dates count as zero days.
    """
    last = parse_iso_date(last_interaction_date)
    if last is None:
        return ScoreResult(score=0, bucket=COLD)

    days = days_since(last, today or date.today())

    if days <= HOT_MAX_DAYS:
        return ScoreResult(score=max(HOT_MIN_SCORE, 100 - math.floor(days / HOT_DECAY_DAYS)), bucket=HOT)
    if days <= WARM_MAX_DAYS:
        score = max(WARM_MIN_SCORE, 79 - math.floor((days - HOT_MAX_DAYS) / WARM_DECAY_DAYS))
        return ScoreResult(score=score, bucket=WARM)
    return ScoreResult(score=max(0, 39 - math.floor((days - WARM_MAX_DAYS) / COLD_DECAY_DAYS)), bucket=COLD)


def _overlaps(
    value: str | None, candidates: Iterable[str] | None, blank_matches: bool = False
) -> bool:
    """
    Case-insensitive containment in either direction against any candidate.

    A blank value only matches when ``blank_matches`` is set. List entries
    (skills, past companies) use it: "" is contained in every candidate.
    """
    if value is None or not candidates:
        return False
    if not value and not blank_matches:
        return False
    text = value.lower()
    for candidate in candidates:
        if candidate is None:
            continue
        term = candidate.lower()
        if term in text or text in term:
            return True
    return False


def _industry_matches(contact: Contact, profile: CareerGoalProfile) -> bool:
    if _overlaps(contact.industry, profile.target_industries):
        return True
    if not profile.target_industries:
        return False

    # Industry is often missing on imported contacts; look at title/company/headline instead
    text = (
        f"{contact.current_title or ''} {contact.current_company or ''} {contact.headline or ''}"
    ).lower()
    for industry in profile.target_industries:
        term = industry.lower()
        for keyword in INDUSTRY_KEYWORDS:
            if keyword in term and keyword in text:
                return True
        if term in text:
            return True
    return False


def _company_matches(contact: Contact, profile: CareerGoalProfile) -> bool:
    if _overlaps(contact.current_company, profile.wishlist_companies):
        return True
    return any(
        _overlaps(past, profile.wishlist_companies, blank_matches=True)
        for past in contact.past_companies or []
    )


def _skill_match_count(contact: Contact, profile: CareerGoalProfile) -> int:
    if not contact.skills or not profile.target_skills:
        return 0
    return sum(
        1 for skill in contact.skills if _overlaps(skill, profile.target_skills, blank_matches=True)
    )


def _resolve_weights(weights: RelevanceWeights | Mapping[str, float] | None) -> RelevanceWeights:
    if weights is None:
        return settings.default_relevance_weights()
    if isinstance(weights, RelevanceWeights):
        return weights
    return RelevanceWeights.from_mapping(dict(weights))


def score_relevance(
    contact: Contact,
    profile: CareerGoalProfile | None,
    weights: RelevanceWeights | Mapping[str, float] | None = None,
) -> ScoreResult:
    """
    Score how well a contact fits the user's career goals.

    Five independent factors (industry, role, location, company, skills) each
    add their weight when matched. Factors weighted 0 are left out of both the
    total and the maximum, so the result is normalized over the active factors.

    Args:
        contact: Contact to score
        profile: User's career goals; None yields the neutral 50/medium result
        weights: Per-factor weights (RelevanceWeights or a stored mapping);
            None uses the configured defaults

    Returns:
        ScoreResult with score 0-100 and bucket high/medium/low
    """
    if profile is None:
        return NEUTRAL_RELEVANCE

    w = _resolve_weights(weights)
    score = 0.0
    max_possible = 0.0

    if w.industry > 0:
        max_possible += w.industry
        if _industry_matches(contact, profile):
            score += w.industry

    if w.role > 0:
        max_possible += w.role
        if _overlaps(contact.current_title or contact.headline, profile.dream_roles):
            score += w.role

    if w.location > 0:
        max_possible += w.location
        if _overlaps(contact.location, profile.preferred_locations):
            score += w.location

    if w.company > 0:
        max_possible += w.company
        if _company_matches(contact, profile):
            score += w.company

    if w.skills > 0:
        max_possible += w.skills
        matches = _skill_match_count(contact, profile)
        if matches >= 2:
            score += w.skills
        elif matches == 1:
            score += w.skills * 0.5

    normalized = round_half_up((score / max_possible) * 100) if max_possible > 0 else 0
    return ScoreResult(score=normalized, bucket=relevance_bucket_for_score(normalized))


def score_priority(relevance_score: float, warmth_score: float) -> ScoreResult:
    """Blend relevance (70%) and warmth (30%) into an A/B/C priority."""
    score = round_half_up(
        PRIORITY_RELEVANCE_SHARE * relevance_score + PRIORITY_WARMTH_SHARE * warmth_score
    )
    return ScoreResult(score=score, bucket=priority_bucket_for_score(score))
