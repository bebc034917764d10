from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import date


class Photo(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    image_url: str = Field(alias="imageUrl")
    position: int = 0
    is_primary: bool = Field(False, alias="isPrimary")


class Prompt(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    question: str
    answer: str


class Profile(BaseModel):
    """A users row joined with its photos and its profiles row."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    email: Optional[str] = None
    display_name: Optional[str] = Field(None, alias="displayName")
    surname: Optional[str] = None
    dob: Optional[date] = None
    gender: Optional[str] = None
    looking_for: List[str] = Field(default_factory=list, alias="lookingFor")
    interested_in: List[str] = Field(default_factory=list, alias="interestedIn")
    height: Optional[str] = None
    onboarding_step: Optional[int] = Field(None, alias="onboardingStep")
    onboarding_completed: bool = Field(False, alias="onboardingCompleted")
    photos: List[Photo] = Field(default_factory=list)
    bio: Optional[str] = None
    prompts: List[Prompt] = Field(default_factory=list)
    available_next_8_days: List[bool] = Field(default_factory=list, alias="availableNext8Days")

    @field_validator("looking_for", "interested_in", "photos", "prompts", "available_next_8_days", mode="before")
    @classmethod
    def _null_as_empty(cls, v):
        return [] if v is None else v

    @field_validator("onboarding_completed", mode="before")
    @classmethod
    def _null_as_false(cls, v):
        return bool(v)

    @field_validator("photos")
    @classmethod
    def _order_photos(cls, v: List[Photo]) -> List[Photo]:
        return sorted(v, key=lambda p: p.position)
