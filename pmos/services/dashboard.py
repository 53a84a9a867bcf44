"""
Dashboard summary over the resource collection.
"""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from pmos.models import DashboardSummary, Resource
from pmos.services.curriculum import round_percentage

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_LIMIT = 5

_EPOCH = datetime.fromtimestamp(0, tz=UTC)


def _completion_time(resource: Resource) -> datetime:
    """Parse completion_date; missing or unparseable dates sort as the epoch."""
    if not resource.completion_date:
        return _EPOCH
    try:
        parsed = datetime.fromisoformat(resource.completion_date.replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Unparseable completion_date on resource {resource.id}")
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def summarize_dashboard(resources: Iterable[Resource]) -> DashboardSummary:
    """
    Headline numbers for the dashboard.

    Returns totals, completion percentage, the most recently completed
    resources, the first resource in progress and the next queued one.
    """
    resources = list(resources)
    completed = [r for r in resources if r.status == "completed"]

    recent = sorted(completed, key=_completion_time, reverse=True)[:RECENT_ACTIVITY_LIMIT]
    in_progress = next((r for r in resources if r.status == "in-progress"), None)
    next_up = next(
        (r for r in resources if r.status == "queued" and not r.completion_date), None
    )

    return DashboardSummary(
        total_resources=len(resources),
        completed_resources=len(completed),
        completion_percentage=round_percentage(len(completed), len(resources)),
        recent_activity=recent,
        in_progress=in_progress,
        next_up=next_up,
    )
