"""
API routes for the resource library.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from pmos.models import ResourceCreate, ResourceUpdate
from pmos.services.curriculum_store import CurriculumStore
from pmos.services.library import ALL, filter_resources
from pmos.utils.db_helpers import get_curriculum_store, get_resource_or_404

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("")
async def list_resources(
    search: str = "",
    content_type: str = Query(ALL),
    status: str = Query(ALL),
    store: CurriculumStore = Depends(get_curriculum_store),
):
    """
    List resources, filtered by title/topic search, content type and status.
    """
    try:
        resources = filter_resources(
            store.load_resources(), search=search, content_type=content_type, status=status
        )
        return {"success": True, "resources": [r.model_dump() for r in resources]}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error listing resources: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to list resources: {str(e)}") from e


@router.post("")
async def create_resource(
    request: ResourceCreate, store: CurriculumStore = Depends(get_curriculum_store)
):
    """
    Add a resource to the library. New resources start queued.
    """
    try:
        resource = store.create_resource(request)
        return {"success": True, "resource": resource.model_dump()}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating resource: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to create resource: {str(e)}") from e


@router.patch("/{resource_id}")
async def update_resource(
    resource_id: str,
    request: ResourceUpdate,
    store: CurriculumStore = Depends(get_curriculum_store),
):
    """
    Edit a resource. Only the fields present in the body are changed.
    """
    try:
        get_resource_or_404(store, resource_id)
        updated = store.update_resource(resource_id, request)
        return {"success": True, "resource": updated.model_dump()}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating resource {resource_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to update resource: {str(e)}") from e


@router.post("/{resource_id}/toggle-status")
async def toggle_resource_status(
    resource_id: str, store: CurriculumStore = Depends(get_curriculum_store)
):
    """
    Mark a resource completed, or move a completed one back to in-progress.
    """
    try:
        resource = get_resource_or_404(store, resource_id)
        updated = store.toggle_resource_status(resource)
        return {"success": True, "resource": updated.model_dump()}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error toggling resource {resource_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to update resource: {str(e)}") from e


@router.delete("/{resource_id}")
async def delete_resource(
    resource_id: str, store: CurriculumStore = Depends(get_curriculum_store)
):
    """
    Delete a resource and remove it from every module.
    """
    try:
        get_resource_or_404(store, resource_id)
        removed_links = store.delete_resource(resource_id)
        return {"success": True, "removed_links": removed_links}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting resource {resource_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to delete resource: {str(e)}") from e
