from fastapi import HTTPException
from app.modules.onboarding.catalog import MAX_PROMPTS, MIN_PROMPTS
from app.modules.profiles.service import ProfileService
from app.modules.prompts.schemas import PromptsResponse
from typing import Any, Dict, List
import logging

logger = logging.getLogger(__name__)


def _is_filled(entry: Any) -> bool:
    return (
        isinstance(entry, dict)
        and isinstance(entry.get("question"), str)
        and isinstance(entry.get("answer"), str)
        and entry["question"].strip() != ""
        and entry["answer"].strip() != ""
    )


def clean_prompts(raw: Any) -> List[Dict[str, str]]:
    """Keep well-formed prompts and enforce the 1-3 unique-question rule"""
    if not isinstance(raw, list):
        raise HTTPException(status_code=400, detail="Prompts must be an array")

    prompts = [
        {"question": p["question"].strip(), "answer": p["answer"].strip()}
        for p in raw if _is_filled(p)
    ]
    if len(prompts) < MIN_PROMPTS:
        raise HTTPException(status_code=400, detail="At least one prompt is required")
    if len(prompts) > MAX_PROMPTS:
        raise HTTPException(status_code=400, detail=f"Maximum {MAX_PROMPTS} prompts allowed")
    questions = [p["question"] for p in prompts]
    if len(set(questions)) != len(questions):
        raise HTTPException(status_code=400, detail="Each prompt question can only be used once")
    return prompts


class PromptService:
    def __init__(self, profiles: ProfileService):
        self.profiles = profiles

    def save_prompts(self, user_id: str, raw: Any) -> PromptsResponse:
        prompts = clean_prompts(raw)
        try:
            stored = self.profiles.save_prompts(user_id, prompts)
        except Exception as e:
            logger.error(f"Prompts save error for user {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to save prompts")
        return PromptsResponse(prompts=stored)
