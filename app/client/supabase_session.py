from typing import Callable, Optional

from supabase import Client, create_client

from app.client.session import Session, SessionUser, Subscription
from app.client.social import FederatedCredential
from app.config.settings import settings


def _to_session(raw) -> Optional[Session]:
    if raw is None or getattr(raw, "user", None) is None:
        return None
    return Session(
        user=SessionUser(id=raw.user.id, email=raw.user.email),
        access_token=getattr(raw, "access_token", None),
    )


class SupabaseSessionProvider:
    """Session Provider backed by Supabase Auth (supabase-py)."""

    def __init__(self, client: Optional[Client] = None):
        self.client = client or create_client(settings.supabase_url, settings.supabase_key)

    def get_session(self) -> Optional[Session]:
        return _to_session(self.client.auth.get_session())

    def access_token(self) -> Optional[str]:
        session = self.get_session()
        return session.access_token if session else None

    def on_auth_state_change(self, callback: Callable[[str, Optional[Session]], None]) -> Subscription:
        def forward(event, raw_session) -> None:
            callback(str(event), _to_session(raw_session))

        return self.client.auth.on_auth_state_change(forward)

    def sign_in_with_id_token(self, credential: FederatedCredential) -> Optional[Session]:
        params = {"provider": credential.provider, "token": credential.id_token}
        if credential.nonce:
            params["nonce"] = credential.nonce
        if credential.access_token:
            params["access_token"] = credential.access_token
        response = self.client.auth.sign_in_with_id_token(params)
        return _to_session(response.session)

    def sign_out(self) -> None:
        self.client.auth.sign_out()
