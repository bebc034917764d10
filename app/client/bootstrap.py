"""
Client composition root.

Builds the objects the mobile app holds for its lifetime: the auth state,
the profile store the screens write through, and the API client for the
upload proxy. Call initialize() on the returned auth state at app start and
close() on shutdown.
"""

from dataclasses import dataclass
from typing import Optional

import httpx
from supabase import Client, create_client

from app.client.api_client import ApiClient
from app.client.profile_cache import ProfileCache
from app.client.session import AuthStateHolder
from app.client.social import FederatedProvider
from app.client.supabase_session import SupabaseSessionProvider
from app.config.settings import settings
from app.modules.profiles.service import ProfileService


@dataclass
class ClientContext:
    auth: AuthStateHolder
    profiles: ProfileService
    api: ApiClient

    def close(self) -> None:
        self.auth.close()
        self.api.close()


def build_client_context(
    supabase: Optional[Client] = None,
    google: Optional[FederatedProvider] = None,
    apple: Optional[FederatedProvider] = None,
    cache: Optional[ProfileCache] = None,
    base_url: Optional[str] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> ClientContext:
    supabase = supabase or create_client(settings.supabase_url, settings.supabase_key)
    sessions = SupabaseSessionProvider(supabase)
    profiles = ProfileService(supabase)
    auth = AuthStateHolder(
        sessions,
        profiles,
        cache if cache is not None else ProfileCache(),
        google=google,
        apple=apple,
    )
    return ClientContext(
        auth=auth,
        profiles=profiles,
        api=ApiClient(sessions.access_token, base_url=base_url, transport=transport),
    )
