"""
Core dependencies for route protection and collaborator wiring
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.auth.schemas import AuthenticatedUser
from app.modules.auth.service import AuthService
from app.modules.profiles.service import ProfileService
from app.modules.uploads.r2_storage import R2Storage
from supabase import Client
from typing import Optional
import logging

logger = logging.getLogger(__name__)

# auto_error=False so a missing header answers 401 rather than FastAPI's default
security = HTTPBearer(auto_error=False)

_storage: Optional[R2Storage] = None


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> AuthenticatedUser:
    """Resolve the caller from the bearer token. The user id is never taken from the request body."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: No token provided",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return auth_service.get_current_user(credentials.credentials)


def get_profile_service(supabase: Client = Depends(get_service_supabase)) -> ProfileService:
    return ProfileService(supabase)


def get_storage() -> R2Storage:
    global _storage
    if _storage is None:
        try:
            _storage = R2Storage()
        except ValueError as e:
            logger.error(f"Object storage unavailable: {e}")
            raise HTTPException(status_code=500, detail="Storage service not configured")
    return _storage
