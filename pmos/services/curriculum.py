"""
Module lock state and track progress, derived from resource completion.

Module status is never stored. It is recomputed from the current resource
statuses on every call:

- completed: the module has at least one linked resource and all are completed
- available: first module of its track, or the previous module is completed
- locked: anything else

Tracks are a single linear chain ordered by Module.order. A module with no
linked resources can never complete, so every module after it stays locked.
"""

import logging
import math
from collections.abc import Sequence

from pmos.models import (
    CurriculumSnapshot,
    Module,
    ModuleProgress,
    ModuleResource,
    ModuleStats,
    ModuleStatus,
    Resource,
    Track,
    TrackProgress,
    TrackSummary,
)

logger = logging.getLogger(__name__)


def round_percentage(part: int, whole: int) -> int:
    """Integer percentage rounded half up; 0 when there is nothing to count."""
    if whole <= 0:
        return 0
    return math.floor(part / whole * 100 + 0.5)


def _linked_resource_ids(module_id: str, module_resources: Sequence[ModuleResource]) -> set[str]:
    return {link.resource_id for link in module_resources if link.module_id == module_id}


def get_module_stats(
    module_id: str,
    module_resources: Sequence[ModuleResource],
    resources: Sequence[Resource],
) -> ModuleStats:
    """
    Count linked and completed resources for a module.

    Args:
        module_id: Module to inspect
        module_resources: Join rows (module -> resource)
        resources: Resource collection snapshot

    Returns:
        ModuleStats
    """
    resource_ids = _linked_resource_ids(module_id, module_resources)
    linked = [r for r in resources if r.id in resource_ids]

    total = len(linked)
    completed = sum(1 for r in linked if r.status == "completed")

    return ModuleStats(
        total=total,
        completed=completed,
        is_complete=total > 0 and completed == total,
        is_started=completed > 0,
    )


def sort_track_modules(track_id: str, modules: Sequence[Module]) -> list[Module]:
    """Modules belonging to a track, in sequence order."""
    return sorted((m for m in modules if m.track_id == track_id), key=lambda m: m.order)


def get_module_status(
    module: Module,
    sorted_modules: Sequence[Module],
    module_resources: Sequence[ModuleResource],
    resources: Sequence[Resource],
) -> ModuleStatus:
    """
    Derive whether a module is completed, available or locked.

    Args:
        module: Module to classify
        sorted_modules: The module's track, already in sequence order
        module_resources: Join rows (module -> resource)
        resources: Resource collection snapshot

    Returns:
        "completed", "available" or "locked"

    Raises:
        ValueError: If the module is not part of sorted_modules
    """
    if get_module_stats(module.id, module_resources, resources).is_complete:
        return "completed"

    index = next((i for i, m in enumerate(sorted_modules) if m.id == module.id), None)
    if index is None:
        raise ValueError(f"Module {module.id} is not part of the given track sequence")

    if index == 0:
        return "available"

    previous = sorted_modules[index - 1]
    if get_module_stats(previous.id, module_resources, resources).is_complete:
        return "available"
    return "locked"


def calculate_track_progress(
    track_id: str,
    modules: Sequence[Module],
    module_resources: Sequence[ModuleResource],
    resources: Sequence[Resource],
) -> int:
    """Percentage of the track's linked resources that are completed."""
    module_ids = {m.id for m in modules if m.track_id == track_id}
    resource_ids = {link.resource_id for link in module_resources if link.module_id in module_ids}
    track_resources = [r for r in resources if r.id in resource_ids]

    completed = sum(1 for r in track_resources if r.status == "completed")
    return round_percentage(completed, len(track_resources))


def build_track_progress(track: Track, snapshot: CurriculumSnapshot) -> TrackProgress:
    """
    Assemble the curriculum view for one track: progress plus every module
    with its status and stats, in sequence order.
    """
    sorted_modules = sort_track_modules(track.id, snapshot.modules)

    module_views = [
        ModuleProgress(
            module=module,
            status=get_module_status(
                module, sorted_modules, snapshot.module_resources, snapshot.resources
            ),
            stats=get_module_stats(module.id, snapshot.module_resources, snapshot.resources),
        )
        for module in sorted_modules
    ]

    progress = calculate_track_progress(
        track.id, snapshot.modules, snapshot.module_resources, snapshot.resources
    )
    logger.debug(f"Track {track.id}: {len(module_views)} modules, {progress}% complete")

    return TrackProgress(track=track, progress=progress, modules=module_views)


def summarize_tracks(snapshot: CurriculumSnapshot) -> list[TrackSummary]:
    """
    Overview of every track in display order: module count and completion
    percentage, computed from a single snapshot.
    """
    summaries = []
    for track in sorted(snapshot.tracks, key=lambda t: t.order):
        module_count = sum(1 for m in snapshot.modules if m.track_id == track.id)
        progress = calculate_track_progress(
            track.id, snapshot.modules, snapshot.module_resources, snapshot.resources
        )
        summaries.append(
            TrackSummary(**track.model_dump(), module_count=module_count, progress=progress)
        )
    return summaries


def get_module_resources(
    module_id: str,
    module_resources: Sequence[ModuleResource],
    resources: Sequence[Resource],
) -> list[Resource]:
    """The module's resources ordered by the join row's sequence_order."""
    sequence = {}
    for link in module_resources:
        if link.module_id == module_id:
            sequence.setdefault(link.resource_id, link.sequence_order or 0)

    linked = [r for r in resources if r.id in sequence]
    return sorted(linked, key=lambda r: sequence[r.id])
