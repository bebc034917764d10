"""In-progress selections held by the onboarding screens before they submit."""

import uuid
from dataclasses import dataclass
from typing import Iterable, List, Optional

from app.modules.onboarding.catalog import (
    LOOKING_FOR_OPTIONS,
    MAX_LOOKING_FOR,
    MAX_PHOTOS,
    MAX_PROMPTS,
    MIN_PHOTOS,
    PREDEFINED_PROMPTS,
)
from app.modules.onboarding.validators import OnboardingValidationError, validate_prompt
from app.modules.profiles.schemas import Photo, Prompt


class LookingForSelection:
    def __init__(self, selected: Iterable[str] = ()):
        self.selected: List[str] = [v for v in selected if v in LOOKING_FOR_OPTIONS][:MAX_LOOKING_FOR]

    def toggle(self, value: str) -> List[str]:
        """Add or remove value; a fourth choice is ignored."""
        if value in self.selected:
            self.selected.remove(value)
        elif value in LOOKING_FOR_OPTIONS and len(self.selected) < MAX_LOOKING_FOR:
            self.selected.append(value)
        return list(self.selected)


@dataclass
class LocalPhoto:
    content: bytes
    filename: str = "photo.jpg"
    content_type: str = "image/jpeg"


@dataclass
class PhotoSlot:
    local: Optional[LocalPhoto] = None
    uploaded: Optional[Photo] = None

    @property
    def pending(self) -> bool:
        return self.uploaded is None


class PhotoSelection:
    def __init__(self, existing: Iterable[Photo] = ()):
        self.slots: List[PhotoSlot] = [PhotoSlot(uploaded=p) for p in existing][:MAX_PHOTOS]
        # uploaded photos the user took out; deleted on the server at submit
        self.removed: List[Photo] = []

    @property
    def count(self) -> int:
        return len(self.slots)

    @property
    def remaining_slots(self) -> int:
        return MAX_PHOTOS - len(self.slots)

    @property
    def can_continue(self) -> bool:
        return len(self.slots) >= MIN_PHOTOS

    def add(self, *photos: LocalPhoto) -> int:
        """Append photos up to the limit; returns how many were taken."""
        if self.remaining_slots <= 0:
            raise OnboardingValidationError("Limit Reached", f"You can only upload up to {MAX_PHOTOS} photos.")
        accepted = list(photos)[:self.remaining_slots]
        self.slots.extend(PhotoSlot(local=p) for p in accepted)
        return len(accepted)

    def remove(self, index: int) -> PhotoSlot:
        slot = self.slots.pop(index)
        if slot.uploaded is not None:
            self.removed.append(slot.uploaded)
        return slot

    def pending(self) -> List[PhotoSlot]:
        return [s for s in self.slots if s.pending]


class PromptSelection:
    """Up to three prompt slots; a question may occupy only one of them."""

    def __init__(self, existing: Iterable[Prompt] = ()):
        self.slots: List[Optional[Prompt]] = [None] * MAX_PROMPTS
        for index, prompt in enumerate(list(existing)[:MAX_PROMPTS]):
            self.slots[index] = prompt

    def used_questions(self, except_slot: Optional[int] = None) -> List[str]:
        return [p.question for i, p in enumerate(self.slots) if p is not None and i != except_slot]

    def available_questions(self, slot: int) -> List[str]:
        used = self.used_questions(except_slot=slot)
        return [q for q in PREDEFINED_PROMPTS if q not in used]

    def set(self, slot: int, question: str, answer: str) -> Prompt:
        question, answer = validate_prompt(question, answer)
        if question in self.used_questions(except_slot=slot):
            raise OnboardingValidationError("Duplicate prompt", "You've already answered this prompt.")
        current = self.slots[slot]
        prompt = Prompt(id=current.id if current else uuid.uuid4().hex, question=question, answer=answer)
        self.slots[slot] = prompt
        return prompt

    def clear(self, slot: int) -> None:
        self.slots[slot] = None

    @property
    def prompts(self) -> List[Prompt]:
        return [p for p in self.slots if p is not None]

    def can_continue(self, bio: str) -> bool:
        return len(self.prompts) >= 1 and bool((bio or "").strip())
