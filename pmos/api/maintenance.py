"""
API routes for seeding and wiping curriculum data.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from pmos.services.curriculum_store import CurriculumStore
from pmos.utils.db_helpers import get_curriculum_store

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/seed")
async def seed_demo_data(store: CurriculumStore = Depends(get_curriculum_store)):
    """Insert the demo track when the store is empty."""
    try:
        seeded = store.seed_demo_data()
        return {"success": True, "seeded": seeded}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error seeding demo data: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to seed data: {str(e)}") from e


@router.delete("/data")
async def reset_data(store: CurriculumStore = Depends(get_curriculum_store)):
    """Delete ALL tracks, modules, resources, links and syntheses."""
    try:
        deleted = store.reset_all()
        return {"success": True, "deleted": deleted}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error resetting data: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to reset data: {str(e)}") from e
