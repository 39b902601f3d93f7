"""
Bucket thresholds shared by every component that classifies a score.

Warmth buckets are decided by the days-since branch in the warmth scorer,
so the warmth constants here are day boundaries rather than score cut-offs.
"""

from typing import Literal

WarmthBucket = Literal["hot", "warm", "cold"]
RelevanceBucket = Literal["high", "medium", "low"]
PriorityBucket = Literal["A", "B", "C"]

HOT: WarmthBucket = "hot"
WARM: WarmthBucket = "warm"
COLD: WarmthBucket = "cold"

HIGH: RelevanceBucket = "high"
MEDIUM: RelevanceBucket = "medium"
LOW: RelevanceBucket = "low"

# Warmth day boundaries (inclusive upper bounds)
HOT_MAX_DAYS = 90
WARM_MAX_DAYS = 365

# Floors of each warmth band
HOT_MIN_SCORE = 80
WARM_MIN_SCORE = 40

# Empirical decay divisors, one score point lost per N days
HOT_DECAY_DAYS = 4.5
WARM_DECAY_DAYS = 7
COLD_DECAY_DAYS = 30

RELEVANCE_HIGH_MIN = 80
RELEVANCE_MEDIUM_MIN = 40

PRIORITY_A_MIN = 70
PRIORITY_B_MIN = 40

PRIORITY_RELEVANCE_SHARE = 0.7
PRIORITY_WARMTH_SHARE = 0.3


def warmth_bucket_for_days(days_since: int) -> WarmthBucket:
    if days_since <= HOT_MAX_DAYS:
        return HOT
    if days_since <= WARM_MAX_DAYS:
        return WARM
    return COLD


def relevance_bucket_for_score(score: float) -> RelevanceBucket:
    if score >= RELEVANCE_HIGH_MIN:
        return HIGH
    if score >= RELEVANCE_MEDIUM_MIN:
        return MEDIUM
    return LOW


def priority_bucket_for_score(score: float) -> PriorityBucket:
    if score >= PRIORITY_A_MIN:
        return "A"
    if score >= PRIORITY_B_MIN:
        return "B"
    return "C"
