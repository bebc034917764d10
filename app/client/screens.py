"""
Onboarding step screens.

Every screen follows the same contract: read the prior value from the profile,
validate the user's input, write its slice of the profile together with the
step advance, refresh the profile and hand back the next route. A failed
validation or write returns an error and no route; the user retries by
submitting again.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Tuple, Type
import logging

from app.client.api_client import ApiClient
from app.client.selections import PhotoSelection, PromptSelection
from app.client.session import AuthStateHolder, SessionUser
from app.modules.onboarding.catalog import MIN_PHOTOS, HeightOption
from app.modules.onboarding.navigation import MAIN_ROUTE
from app.modules.onboarding.steps import OnboardingStep
from app.modules.onboarding.validators import (
    OnboardingValidationError,
    availability_from_day,
    validate_bio,
    validate_birth_date,
    validate_gender,
    validate_height,
    validate_interested_in,
    validate_looking_for,
    validate_name,
    validate_prompt_set,
)
from app.modules.profiles.schemas import Photo
from app.modules.profiles.service import ProfileService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepResult:
    ok: bool
    navigate_to: Optional[str] = None
    error_title: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, route: str) -> "StepResult":
        return cls(ok=True, navigate_to=route)

    @classmethod
    def failure(cls, title: str, message: str) -> "StepResult":
        return cls(ok=False, error_title=title, error=message)


class StepScreen:
    step: OnboardingStep
    save_error = "Failed to save. Please try again."

    def __init__(self, auth: AuthStateHolder, profiles: ProfileService):
        self.auth = auth
        self.profiles = profiles

    @property
    def next_route(self) -> str:
        following = self.step.next
        return following.route if following is not None else MAIN_ROUTE

    def initial_value(self) -> Any:
        return None

    def validate(self, value: Any) -> Any:
        raise NotImplementedError

    def persist(self, user: SessionUser, cleaned: Any) -> None:
        raise NotImplementedError

    def advance(self, user: SessionUser, **values) -> None:
        """Save values; the recorded step only ever moves forward."""
        target = int(self.step.next)
        profile = self.auth.profile
        if profile is not None and profile.onboarding_step:
            target = max(target, profile.onboarding_step)
        self.profiles.save_step(user.id, advance_to=target, **values)

    def submit(self, value: Any) -> StepResult:
        user = self.auth.user
        if user is None:
            return StepResult.failure("Error", "No authenticated user found.")
        try:
            cleaned = self.validate(value)
        except OnboardingValidationError as e:
            return StepResult.failure(e.title, e.message)
        try:
            self.persist(user, cleaned)
        except Exception as e:
            logger.error(f"Error saving {self.step.name.lower()} step: {e}")
            return StepResult.failure("Error", self.save_error)
        self.auth.refresh_profile()
        return StepResult.success(self.next_route)


@dataclass
class NameInput:
    first_name: str
    last_name: Optional[str] = None


class NameScreen(StepScreen):
    step = OnboardingStep.NAME
    save_error = "Failed to save name. Please try again."

    def initial_value(self) -> Optional[NameInput]:
        profile = self.auth.profile
        if profile is None or not profile.display_name:
            return None
        return NameInput(profile.display_name, profile.surname)

    def validate(self, value: NameInput) -> Tuple[str, Optional[str]]:
        return validate_name(value.first_name, value.last_name)

    def persist(self, user: SessionUser, cleaned: Tuple[str, Optional[str]]) -> None:
        first, last = cleaned
        # first write for a new user creates the users row
        self.advance(
            user,
            user_values={"email": user.email, "displayName": first, "surname": last},
            create_user=True,
        )


@dataclass
class DateOfBirthInput:
    day: Any
    month: Any
    year: Any


class DateOfBirthScreen(StepScreen):
    step = OnboardingStep.DOB
    save_error = "Failed to save date of birth."

    def __init__(self, auth: AuthStateHolder, profiles: ProfileService, today: Callable[[], date] = date.today):
        super().__init__(auth, profiles)
        self.today = today

    def initial_value(self) -> Optional[date]:
        return self.auth.profile.dob if self.auth.profile else None

    def validate(self, value: DateOfBirthInput) -> Tuple[date, int]:
        return validate_birth_date(value.day, value.month, value.year, today=self.today())

    def persist(self, user: SessionUser, cleaned: Tuple[date, int]) -> None:
        birth_date, _age = cleaned
        self.advance(user, user_values={"dob": birth_date.isoformat()})


class GenderScreen(StepScreen):
    step = OnboardingStep.GENDER
    save_error = "Failed to save gender."

    def initial_value(self) -> Optional[str]:
        return self.auth.profile.gender if self.auth.profile else None

    def validate(self, value: str) -> str:
        return validate_gender(value)

    def persist(self, user: SessionUser, cleaned: str) -> None:
        self.advance(user, user_values={"gender": cleaned})


class LookingForScreen(StepScreen):
    step = OnboardingStep.LOOKING_FOR
    save_error = "Failed to save preferences."

    def initial_value(self) -> List[str]:
        return list(self.auth.profile.looking_for) if self.auth.profile else []

    def validate(self, value: List[str]) -> List[str]:
        return validate_looking_for(value)

    def persist(self, user: SessionUser, cleaned: List[str]) -> None:
        self.advance(user, user_values={"lookingFor": cleaned})


class InterestedInScreen(StepScreen):
    step = OnboardingStep.INTERESTED_IN
    save_error = "Failed to save preferences."

    def initial_value(self) -> List[str]:
        return list(self.auth.profile.interested_in) if self.auth.profile else []

    def validate(self, value: List[str]) -> List[str]:
        return validate_interested_in(value)

    def persist(self, user: SessionUser, cleaned: List[str]) -> None:
        self.advance(user, user_values={"interestedIn": cleaned})


class HeightScreen(StepScreen):
    step = OnboardingStep.HEIGHT
    save_error = "Failed to save height."

    def initial_value(self) -> Optional[int]:
        profile = self.auth.profile
        if profile is None or not profile.height:
            return None
        try:
            feet, inches = (int(part) for part in profile.height.split())
        except ValueError:
            return None
        return feet * 12 + inches

    def validate(self, value: Optional[int]) -> HeightOption:
        return validate_height(value)

    def persist(self, user: SessionUser, cleaned: HeightOption) -> None:
        self.advance(user, user_values={"height": cleaned.stored_value})


class AvailabilityScreen(StepScreen):
    step = OnboardingStep.AVAILABILITY
    save_error = "Failed to save availability."

    def initial_value(self) -> Optional[int]:
        profile = self.auth.profile
        if profile is None or True not in profile.available_next_8_days:
            return None
        return profile.available_next_8_days.index(True)

    def validate(self, value: Optional[int]) -> List[bool]:
        return availability_from_day(value)

    def persist(self, user: SessionUser, cleaned: List[bool]) -> None:
        self.advance(user, profile_values={"availableNext8Days": cleaned})


class PhotosScreen(StepScreen):
    step = OnboardingStep.PHOTOS
    save_error = "Failed to upload one or more photos. Please try again."

    def __init__(self, auth: AuthStateHolder, profiles: ProfileService, api: ApiClient):
        super().__init__(auth, profiles)
        self.api = api

    def initial_value(self) -> PhotoSelection:
        return PhotoSelection(self.auth.profile.photos if self.auth.profile else ())

    def validate(self, value: PhotoSelection) -> PhotoSelection:
        if not value.can_continue:
            raise OnboardingValidationError(
                "Minimum Photos", f"Please add at least {MIN_PHOTOS} photos to continue."
            )
        return value

    def persist(self, user: SessionUser, cleaned: PhotoSelection) -> None:
        # deletes first so the server's photo limit has room for the new uploads
        while cleaned.removed:
            self.api.delete_photo(cleaned.removed[0].id)
            cleaned.removed.pop(0)
        # sequential; slots already uploaded are skipped on a retry
        for slot in cleaned.pending():
            uploaded = self.api.upload_photo(
                slot.local.content, slot.local.filename, slot.local.content_type
            )
            slot.uploaded = _as_photo(uploaded)
        self.advance(user)


def _as_photo(uploaded) -> Photo:
    return Photo(
        id=uploaded.id,
        image_url=uploaded.image_url,
        position=uploaded.position,
        is_primary=uploaded.is_primary,
    )


@dataclass
class PromptsInput:
    selection: PromptSelection
    bio: str


class PromptsScreen(StepScreen):
    step = OnboardingStep.PROMPTS
    save_error = "Failed to save prompts."

    def initial_value(self) -> PromptsInput:
        profile = self.auth.profile
        if profile is None:
            return PromptsInput(PromptSelection(), "")
        return PromptsInput(PromptSelection(profile.prompts), profile.bio or "")

    def validate(self, value: PromptsInput) -> Dict[str, Any]:
        prompts = value.selection.prompts
        validate_prompt_set([p.question for p in prompts])
        bio = validate_bio(value.bio)
        return {
            "prompts": [p.model_dump(exclude_none=True) for p in prompts],
            "bio": bio,
        }

    def persist(self, user: SessionUser, cleaned: Dict[str, Any]) -> None:
        self.advance(user, profile_values=cleaned)


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


class LocationScreen(StepScreen):
    """Final step. Location may be skipped; finishing marks onboarding complete."""

    step = OnboardingStep.LOCATION
    save_error = "Failed to save your location. Please try again."

    def validate(self, value: Optional[Coordinates]) -> Optional[Coordinates]:
        return value

    def persist(self, user: SessionUser, cleaned: Optional[Coordinates]) -> None:
        if cleaned is not None:
            self.profiles.set_location(user.id, cleaned.latitude, cleaned.longitude)
        self.profiles.save_step(user.id, complete=True)


SCREENS: Dict[OnboardingStep, Type[StepScreen]] = {
    OnboardingStep.NAME: NameScreen,
    OnboardingStep.DOB: DateOfBirthScreen,
    OnboardingStep.GENDER: GenderScreen,
    OnboardingStep.LOOKING_FOR: LookingForScreen,
    OnboardingStep.INTERESTED_IN: InterestedInScreen,
    OnboardingStep.HEIGHT: HeightScreen,
    OnboardingStep.AVAILABILITY: AvailabilityScreen,
    OnboardingStep.PHOTOS: PhotosScreen,
    OnboardingStep.PROMPTS: PromptsScreen,
    OnboardingStep.LOCATION: LocationScreen,
}
