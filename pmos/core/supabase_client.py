import logging

from supabase import Client, create_client

from pmos.config import settings

logger = logging.getLogger(__name__)

_supabase_client: Client | None = None


def get_supabase_client() -> Client:
    """Create (once) and return the Supabase client backing the curriculum store."""
    global _supabase_client

    if _supabase_client is None:
        # Service key preferred; anon key works for projects with open row-level policies
        key = settings.supabase_service_key or settings.supabase_anon_key
        if not settings.supabase_url or not key:
            raise ValueError("Supabase URL or API key is not configured")

        _supabase_client = create_client(settings.supabase_url, key)
        logger.info("Supabase client initialized successfully")

    return _supabase_client


def reset_supabase_client() -> None:
    """Drop the cached client so the next call rebuilds it from current settings."""
    global _supabase_client
    _supabase_client = None
