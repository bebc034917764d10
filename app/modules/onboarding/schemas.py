from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from app.modules.onboarding.navigation import AuthState, NavigationAction


class OnboardingStatusResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    state: Optional[AuthState] = None
    action: NavigationAction
    target: Optional[str] = None
    onboarding_step: Optional[int] = Field(None, alias="onboardingStep")
    onboarding_completed: bool = Field(False, alias="onboardingCompleted")
