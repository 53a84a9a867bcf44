import logging

from fastapi import APIRouter, Depends, HTTPException

from pmos.services.curriculum_store import CurriculumStore
from pmos.services.dashboard import summarize_dashboard
from pmos.utils.db_helpers import get_curriculum_store

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("")
async def get_dashboard(store: CurriculumStore = Depends(get_curriculum_store)):
    """Headline progress numbers and what to study next."""
    try:
        summary = summarize_dashboard(store.load_resources())
        return {"success": True, "dashboard": summary.model_dump()}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error building dashboard: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to build dashboard: {str(e)}") from e
