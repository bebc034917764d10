from supabase import Client
from app.modules.profiles.schemas import Profile
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class ProfileService:
    """Reads and writes the profile slices kept in the users and profiles tables."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, user_id: str) -> Optional[Profile]:
        """Return the user's profile, or None while no users row exists yet."""
        result = self.supabase.table("users")\
            .select("*, photos(*)")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()
        if not result.data:
            return None

        row = dict(result.data[0])
        extra = self.supabase.table("profiles")\
            .select("bio, prompts, availableNext8Days")\
            .eq("userId", user_id)\
            .limit(1)\
            .execute()
        if extra.data:
            row.update(extra.data[0])
        return Profile.model_validate(row)

    def save_step(
        self,
        user_id: str,
        user_values: Optional[Dict[str, Any]] = None,
        profile_values: Optional[Dict[str, Any]] = None,
        advance_to: Optional[int] = None,
        complete: bool = False,
        create_user: bool = False,
    ) -> None:
        """
        Persist one onboarding step.

        profile_values go to the profiles row (created if missing); user_values,
        the step advance and the completion flag go to the users row. With
        create_user the users row is upserted, which the first step needs.
        Errors from PostgREST propagate to the caller.
        """
        if profile_values:
            self.supabase.table("profiles")\
                .upsert({"userId": user_id, **profile_values}, on_conflict="userId")\
                .execute()

        values = dict(user_values or {})
        if advance_to is not None:
            values["onboardingStep"] = advance_to
        if complete:
            values["onboardingCompleted"] = True
        if not values:
            return

        if create_user:
            self.supabase.table("users").upsert({"id": user_id, **values}).execute()
        else:
            self.supabase.table("users").update(values).eq("id", user_id).execute()
        logger.info(f"Saved onboarding step for user {user_id}: {sorted(values)}")

    def save_prompts(self, user_id: str, prompts: List[Dict[str, str]]) -> List[Dict[str, Any]]:
        """Upsert the prompt list keyed by user id and return what was stored"""
        result = self.supabase.table("profiles")\
            .upsert({"userId": user_id, "prompts": prompts}, on_conflict="userId")\
            .execute()
        if not result.data:
            return prompts
        return result.data[0].get("prompts") or prompts

    def set_location(self, user_id: str, latitude: float, longitude: float) -> None:
        self.supabase.rpc(
            "set_profile_location",
            {"uid": user_id, "lat": latitude, "lng": longitude}
        ).execute()
