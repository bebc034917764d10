from fastapi import APIRouter, Depends, HTTPException, Query
from app.core.dependencies import get_current_user, get_profile_service
from app.modules.auth.schemas import AuthenticatedUser
from app.modules.onboarding.navigation import resolve_navigation
from app.modules.onboarding.schemas import OnboardingStatusResponse
from app.modules.profiles.service import ProfileService
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


@router.get("/status", response_model=OnboardingStatusResponse)
async def onboarding_status(
    route: str = Query("/", description="Route the client is currently showing"),
    user: AuthenticatedUser = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service)
):
    """Where the authenticated user belongs, evaluated against their stored onboarding progress."""
    try:
        profile = profiles.get_profile(user.id)
    except Exception as e:
        logger.error(f"Error fetching profile for {user.id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load profile")

    decision = resolve_navigation(user, profile, route)
    return OnboardingStatusResponse(
        state=decision.state,
        action=decision.action,
        target=decision.target,
        onboarding_step=profile.onboarding_step if profile else None,
        onboarding_completed=profile.onboarding_completed if profile else False,
    )
