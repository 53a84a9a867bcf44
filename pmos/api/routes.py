from fastapi import APIRouter
import logging

from pmos.config import settings

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
def health_check():
    """Health check endpoint"""
    logger.debug("Health check called")
    return {
        "status": "healthy",
        "service": settings.app_name,
        "environment": settings.environment,
    }
