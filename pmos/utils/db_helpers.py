"""
Database helper utilities shared by the API endpoints.
"""

import logging

from fastapi import Depends, HTTPException
from supabase import Client

from pmos.core.supabase_client import get_supabase_client
from pmos.models import Module, Resource, Track
from pmos.services.curriculum_store import CurriculumStore

logger = logging.getLogger(__name__)


def get_curriculum_store(supabase: Client = Depends(get_supabase_client)) -> CurriculumStore:
    """FastAPI dependency: a store bound to the shared Supabase client."""
    return CurriculumStore(supabase)


def get_track_or_404(store: CurriculumStore, track_id: str) -> Track:
    """
    Fetch a track by id.

    Raises:
        HTTPException: If the track does not exist
    """
    track = store.get_track(track_id)
    if track is None:
        raise HTTPException(status_code=404, detail="Track not found")
    return track


def get_module_or_404(store: CurriculumStore, module_id: str) -> Module:
    """
    Fetch a module by id.

    Raises:
        HTTPException: If the module does not exist
    """
    module = store.get_module(module_id)
    if module is None:
        raise HTTPException(status_code=404, detail="Module not found")
    return module


def get_resource_or_404(store: CurriculumStore, resource_id: str) -> Resource:
    """
    Fetch a resource by id.

    Raises:
        HTTPException: If the resource does not exist
    """
    resource = store.get_resource(resource_id)
    if resource is None:
        raise HTTPException(status_code=404, detail="Resource not found")
    return resource
