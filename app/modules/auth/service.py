import hashlib
import logging
import time
from supabase import Client
from app.modules.auth.schemas import AuthenticatedUser
from fastapi import HTTPException
from typing import Dict

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. a photo batch uploaded with one token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def clear_auth_cache() -> None:
    _AUTH_USER_CACHE.clear()


def _evict_expired(now: float) -> None:
    for key in [k for k, (_, expiry) in _AUTH_USER_CACHE.items() if expiry <= now]:
        del _AUTH_USER_CACHE[key]


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_current_user(self, token: str) -> AuthenticatedUser:
        """Verify a bearer token against Supabase Auth. Uses short TTL cache to reduce auth API calls."""
        try:
            cache_key = hashlib.sha256(token.encode()).hexdigest()
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                user, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return user
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Unauthorized: Invalid token")
            user = AuthenticatedUser(id=user_response.user.id, email=user_response.user.email)
            if len(_AUTH_USER_CACHE) >= _AUTH_CACHE_MAX_SIZE:
                _evict_expired(now)
            if len(_AUTH_USER_CACHE) >= _AUTH_CACHE_MAX_SIZE:
                # insertion order: the first key is the oldest entry
                del _AUTH_USER_CACHE[next(iter(_AUTH_USER_CACHE))]
            _AUTH_USER_CACHE[cache_key] = (user, now + _AUTH_CACHE_TTL_SEC)
            return user
        except HTTPException:
            raise
        except Exception as e:
            logger.warning(f"Authentication error: {e}")
            raise HTTPException(status_code=401, detail="Unauthorized: Authentication failed")
