"""Score and segmentation helpers shared by the aggregation services"""
import math
from typing import Dict, Iterable, List, Optional

from portal.config.settings import (
    AVERAGE_PROGRESS_MIN_SCORE,
    HIGH_PERFORMER_MIN_SCORE,
    SEGMENT_AVERAGE_PROGRESS,
    SEGMENT_HIGH_PERFORMERS,
    SEGMENT_INACTIVE,
    SEGMENT_STRUGGLING,
)

SEGMENT_ORDER = (
    SEGMENT_HIGH_PERFORMERS,
    SEGMENT_AVERAGE_PROGRESS,
    SEGMENT_STRUGGLING,
    SEGMENT_INACTIVE,
)


def round_half_up(value: Optional[float]) -> int:
    """Integer rounding with .5 going up, for non-negative scores"""
    if value is None:
        return 0
    return int(math.floor(value + 0.5))


def round2(value: Optional[float]) -> float:
    return round(value or 0, 2)


def safe_average(values: Iterable[float]) -> float:
    values = [v for v in values if v is not None]
    if not values:
        return 0
    return sum(values) / len(values)


def percentage(part: float, whole: float) -> float:
    """part/whole as a percentage with 2 decimals; 0 when whole is 0"""
    if not whole:
        return 0
    return round(part / whole * 100, 2)


def engagement_rate(completions: int, active_members: int) -> float:
    """Completions per active member as a percentage, clamped to [0, 100]"""
    rate = percentage(completions or 0, active_members)
    return min(max(rate, 0), 100)


def classify_member(average_score: Optional[float], record_count: int) -> str:
    """Segment for one member; members without performance records are inactive"""
    if not record_count:
        return SEGMENT_INACTIVE
    if average_score is None:
        return SEGMENT_STRUGGLING
    if average_score >= HIGH_PERFORMER_MIN_SCORE:
        return SEGMENT_HIGH_PERFORMERS
    if average_score >= AVERAGE_PROGRESS_MIN_SCORE:
        return SEGMENT_AVERAGE_PROGRESS
    return SEGMENT_STRUGGLING


def segment_members(member_summaries: List[Dict]) -> List[Dict]:
    """
    Bucket active members by their average understanding score.

    Each summary carries ``averageScore`` and ``recordCount``. Every member lands
    in exactly one bucket and all four buckets are always returned.
    """
    counts = {segment: 0 for segment in SEGMENT_ORDER}
    for summary in member_summaries:
        segment = classify_member(summary.get("averageScore"), summary.get("recordCount", 0))
        counts[segment] += 1

    total = len(member_summaries)
    return [
        {"category": segment, "count": counts[segment], "percentage": percentage(counts[segment], total)}
        for segment in SEGMENT_ORDER
    ]
