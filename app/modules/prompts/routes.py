from fastapi import APIRouter, Depends
from app.core.dependencies import get_current_user, get_profile_service
from app.modules.auth.schemas import AuthenticatedUser
from app.modules.profiles.service import ProfileService
from app.modules.prompts.schemas import PromptsRequest, PromptsResponse
from app.modules.prompts.service import PromptService

router = APIRouter(prefix="/prompts", tags=["prompts"])


def get_prompt_service(profiles: ProfileService = Depends(get_profile_service)) -> PromptService:
    return PromptService(profiles)


@router.post("", response_model=PromptsResponse)
async def save_prompts(
    request: PromptsRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: PromptService = Depends(get_prompt_service)
):
    """Save 1-3 profile prompts for the authenticated user (upsert on the profiles row)"""
    return service.save_prompts(user.id, request.prompts)
