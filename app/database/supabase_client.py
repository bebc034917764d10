import logging
from fastapi import HTTPException
from supabase import create_client, Client
from app.config.settings import settings

logger = logging.getLogger(__name__)


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def is_configured(cls) -> bool:
        return bool(settings.supabase_url and settings.supabase_key)

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Used for profile writes."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


def get_supabase() -> Client:
    if not SupabaseClient.is_configured():
        logger.error("Supabase client not initialized. Check SUPABASE_URL and SUPABASE_KEY.")
        raise HTTPException(
            status_code=500,
            detail="Authentication service not configured. Please contact administrator."
        )
    return SupabaseClient.get_client()


def get_service_supabase() -> Client:
    if not SupabaseClient.is_configured():
        raise HTTPException(
            status_code=500,
            detail="Database service not configured. Please contact administrator."
        )
    return SupabaseClient.get_service_client()
