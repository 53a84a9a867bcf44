"""
API routes for tracks, modules and their lock state.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from pmos.services.curriculum import (
    build_track_progress,
    get_module_resources,
    get_module_stats,
    get_module_status,
    sort_track_modules,
    summarize_tracks,
)
from pmos.services.curriculum_store import CurriculumStore
from pmos.utils.db_helpers import get_curriculum_store, get_module_or_404, get_track_or_404

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/tracks")
async def list_tracks(store: CurriculumStore = Depends(get_curriculum_store)):
    """
    List all tracks in display order, each with its module count and
    completion percentage.
    """
    try:
        tracks = summarize_tracks(store.load_snapshot())
        return {"success": True, "tracks": [t.model_dump() for t in tracks]}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error listing tracks: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to list tracks: {str(e)}") from e


@router.get("/tracks/{track_id}")
async def get_track_curriculum(
    track_id: str, store: CurriculumStore = Depends(get_curriculum_store)
):
    """
    Get a track with its progress and every module's status.

    Module status is derived from current resource completion:
    completed / available / locked.
    """
    try:
        track = get_track_or_404(store, track_id)
        snapshot = store.load_snapshot()

        view = build_track_progress(track, snapshot)
        return {"success": True, **view.model_dump()}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching track {track_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to fetch track: {str(e)}") from e


@router.get("/modules/{module_id}")
async def get_module_detail(
    module_id: str, store: CurriculumStore = Depends(get_curriculum_store)
):
    """
    Get a module with its resources in sequence order.
    """
    try:
        module = get_module_or_404(store, module_id)
        snapshot = store.load_snapshot()

        sorted_modules = sort_track_modules(module.track_id, snapshot.modules)
        status = get_module_status(
            module, sorted_modules, snapshot.module_resources, snapshot.resources
        )
        stats = get_module_stats(module.id, snapshot.module_resources, snapshot.resources)
        resources = get_module_resources(
            module.id, snapshot.module_resources, snapshot.resources
        )

        return {
            "success": True,
            "module": module.model_dump(),
            "status": status,
            "stats": stats.model_dump(),
            "resources": [r.model_dump() for r in resources],
            "all_completed": stats.is_complete,
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching module {module_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to fetch module: {str(e)}") from e
