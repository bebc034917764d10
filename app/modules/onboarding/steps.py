"""
Onboarding step table.

The step number persisted on the users row is the single source of truth for
where an onboarding user belongs. Every number maps to exactly one route;
numbers that do not map fall back to the first step through a named case so
callers can tell a fresh user from a corrupt row.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional
import logging

logger = logging.getLogger(__name__)

ONBOARDING_AREA = "(onboarding)"


class OnboardingStep(IntEnum):
    NAME = 1
    DOB = 2
    GENDER = 3
    LOOKING_FOR = 4
    INTERESTED_IN = 5
    HEIGHT = 6
    AVAILABILITY = 7
    PHOTOS = 8
    PROMPTS = 9
    LOCATION = 10

    @property
    def route(self) -> str:
        return STEP_ROUTES[self]

    @property
    def next(self) -> Optional["OnboardingStep"]:
        """Following step, or None for the final one."""
        if self is LAST_STEP:
            return None
        return OnboardingStep(self + 1)


STEP_ROUTES = {
    OnboardingStep.NAME: f"/{ONBOARDING_AREA}/name",
    OnboardingStep.DOB: f"/{ONBOARDING_AREA}/dob",
    OnboardingStep.GENDER: f"/{ONBOARDING_AREA}/gender",
    OnboardingStep.LOOKING_FOR: f"/{ONBOARDING_AREA}/looking-for",
    OnboardingStep.INTERESTED_IN: f"/{ONBOARDING_AREA}/interested-in",
    OnboardingStep.HEIGHT: f"/{ONBOARDING_AREA}/height",
    OnboardingStep.AVAILABILITY: f"/{ONBOARDING_AREA}/availability",
    OnboardingStep.PHOTOS: f"/{ONBOARDING_AREA}/photos",
    OnboardingStep.PROMPTS: f"/{ONBOARDING_AREA}/prompts",
    OnboardingStep.LOCATION: f"/{ONBOARDING_AREA}/location",
}

FIRST_STEP = OnboardingStep.NAME
LAST_STEP = OnboardingStep.LOCATION


class StepLookup(str, Enum):
    EXACT = "exact"
    MISSING = "missing"  # no step recorded yet
    UNMAPPED = "unmapped"  # recorded number has no route


@dataclass(frozen=True)
class ResolvedStep:
    step: OnboardingStep
    lookup: StepLookup

    @property
    def route(self) -> str:
        return self.step.route


def resolve_step(step_number: Optional[int]) -> ResolvedStep:
    """Map a persisted step number onto the table. Total: never raises."""
    if step_number is None:
        return ResolvedStep(FIRST_STEP, StepLookup.MISSING)
    try:
        return ResolvedStep(OnboardingStep(step_number), StepLookup.EXACT)
    except ValueError:
        logger.warning(f"Onboarding step {step_number!r} has no route; falling back to step {int(FIRST_STEP)}")
        return ResolvedStep(FIRST_STEP, StepLookup.UNMAPPED)
