"""
API routes for curriculum insights (knowledge gaps and recommendations).
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from pmos.services.curriculum_store import CurriculumStore
from pmos.services.insights import detect_gaps, recommend_resources
from pmos.utils.db_helpers import get_curriculum_store

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("")
async def get_insights(store: CurriculumStore = Depends(get_curriculum_store)):
    """
    Analyse the whole library.

    Returns prerequisite topics with thin coverage and the top queued
    resources to pick up next.
    """
    try:
        resources = store.load_resources()

        gaps = detect_gaps(resources)
        recommendations = recommend_resources(resources)
        logger.info(f"Insights: {len(gaps)} gaps, {len(recommendations)} recommendations")

        return {
            "success": True,
            "gaps": [gap.model_dump() for gap in gaps],
            "recommendations": [item.model_dump() for item in recommendations],
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error computing insights: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to compute insights: {str(e)}") from e
