"""
Curriculum insights: knowledge-gap detection and next-resource recommendations.

Both functions are pure. They take the full resource collection as loaded
from the store and return fresh lists; calling them twice on the same input
gives identical output.
"""

import logging
from collections.abc import Iterable

from pmos.models import Recommendation, Resource, TopicGap

logger = logging.getLogger(__name__)

# A prerequisite topic needs at least this many dedicated resources
GAP_COVERAGE_THRESHOLD = 2

RECOMMENDATION_LIMIT = 5
QUICK_WIN_MINUTES = 15

TOPIC_MATCH_POINTS = 2
QUICK_WIN_POINTS = 3
UNPREPARED_ADVANCED_PENALTY = 5

REASON_BUILDS_ON = "Builds on existing knowledge"
REASON_QUICK_WIN = "Quick win"


def detect_gaps(resources: Iterable[Resource]) -> list[TopicGap]:
    """
    Find prerequisite topics that the library does not cover well enough.

    For each topic listed in any resource's prerequisite_topics:
    - required_count: resources listing it as a prerequisite
    - available_count: resources listing it as a plain topic

    A topic is a gap when required_count > 0 and available_count is below
    GAP_COVERAGE_THRESHOLD. Gaps are ordered by required_count descending;
    equal counts keep the order in which the topic was first required.

    Args:
        resources: Resource collection snapshot

    Returns:
        List of TopicGap
    """
    topic_counts: dict[str, int] = {}
    prereq_counts: dict[str, int] = {}

    for resource in resources:
        for topic in resource.topics:
            topic_counts[topic] = topic_counts.get(topic, 0) + 1
        for topic in resource.prerequisite_topics:
            prereq_counts[topic] = prereq_counts.get(topic, 0) + 1

    gaps = [
        TopicGap(
            topic=topic,
            required_count=required,
            available_count=topic_counts.get(topic, 0),
        )
        for topic, required in prereq_counts.items()
        if required > 0 and topic_counts.get(topic, 0) < GAP_COVERAGE_THRESHOLD
    ]
    gaps.sort(key=lambda gap: gap.required_count, reverse=True)

    logger.debug(f"Gap analysis: {len(prereq_counts)} prerequisite topics, {len(gaps)} gaps")
    return gaps


def score_resource(resource: Resource, completed_topics: set[str]) -> Recommendation:
    """Score one queued resource against the topics already completed."""
    matches = sum(1 for topic in resource.topics if topic in completed_topics)

    score = matches * TOPIC_MATCH_POINTS
    if resource.estimated_minutes < QUICK_WIN_MINUTES:
        score += QUICK_WIN_POINTS
    if resource.difficulty == "advanced" and matches == 0:
        score -= UNPREPARED_ADVANCED_PENALTY

    reason = REASON_BUILDS_ON if matches > 0 else REASON_QUICK_WIN
    return Recommendation(resource=resource, score=score, reason=reason)


def recommend_resources(
    resources: Iterable[Resource], limit: int = RECOMMENDATION_LIMIT
) -> list[Recommendation]:
    """
    Rank queued resources by how well they follow on from completed work.

    Scoring per queued resource:
    - +2 for each topic shared with completed resources
    - +3 when estimated_minutes < 15
    - -5 when advanced and sharing no topic with completed work

    Sorted by score descending (stable on input order), truncated to `limit`.

    Args:
        resources: Resource collection snapshot
        limit: Maximum number of recommendations

    Returns:
        List of Recommendation
    """
    resources = list(resources)
    completed_topics = {
        topic
        for resource in resources
        if resource.status == "completed"
        for topic in resource.topics
    }

    ranked = [
        score_resource(resource, completed_topics)
        for resource in resources
        if resource.status == "queued"
    ]
    ranked.sort(key=lambda item: item.score, reverse=True)

    logger.debug(
        f"Recommendations: {len(ranked)} queued resources scored, "
        f"{len(completed_topics)} completed topics"
    )
    return ranked[:limit]
