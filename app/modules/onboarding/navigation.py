"""
Route guard for the mobile app.

resolve_navigation() decides, from who is signed in and what their profile
says, whether the currently rendered route may stay or where it must be
replaced. It is pure so the app shell and the status endpoint share it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from app.modules.onboarding.steps import ONBOARDING_AREA, resolve_step

AUTH_ROUTE = "/(auth)"
MAIN_ROUTE = "/(tabs)"

AUTH_AREAS = frozenset({"(auth)", "auth"})
MAIN_AREAS = frozenset({"(tabs)"})
MODAL_AREAS = frozenset({"(modal)", "modal"})


class AuthState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    NEEDS_ONBOARDING = "needs_onboarding"
    ONBOARDING_IN_PROGRESS = "onboarding_in_progress"
    ACTIVE = "active"


class NavigationAction(str, Enum):
    SUSPEND = "suspend"  # still loading: render a placeholder, do not route
    STAY = "stay"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class NavigationDecision:
    state: Optional[AuthState]
    action: NavigationAction
    target: Optional[str] = None

    @property
    def should_redirect(self) -> bool:
        return self.action is NavigationAction.REDIRECT


class OnboardingProgress(Protocol):
    onboarding_step: Optional[int]
    onboarding_completed: bool


def route_area(route: str) -> str:
    """First path segment, e.g. "(onboarding)" for "/(onboarding)/dob"."""
    segments = [s for s in route.split("?", 1)[0].split("/") if s]
    return segments[0] if segments else ""


def _normalize(route: str) -> str:
    return "/" + "/".join(s for s in route.split("?", 1)[0].split("/") if s)


def classify(user: Optional[object], profile: Optional[OnboardingProgress]) -> AuthState:
    if user is None:
        return AuthState.UNAUTHENTICATED
    if profile is None:
        return AuthState.NEEDS_ONBOARDING
    if not profile.onboarding_completed:
        return AuthState.ONBOARDING_IN_PROGRESS
    return AuthState.ACTIVE


def _stay(state: AuthState) -> NavigationDecision:
    return NavigationDecision(state, NavigationAction.STAY)


def _redirect(state: AuthState, target: str) -> NavigationDecision:
    return NavigationDecision(state, NavigationAction.REDIRECT, target)


def resolve_navigation(
    user: Optional[object],
    profile: Optional[OnboardingProgress],
    current_route: str,
    loading: bool = False,
) -> NavigationDecision:
    if loading:
        return NavigationDecision(None, NavigationAction.SUSPEND)

    state = classify(user, profile)
    area = route_area(current_route)

    if state is AuthState.UNAUTHENTICATED:
        if area in AUTH_AREAS:
            return _stay(state)
        return _redirect(state, AUTH_ROUTE)

    if state is AuthState.ACTIVE:
        if area in MAIN_AREAS or area in MODAL_AREAS:
            return _stay(state)
        return _redirect(state, MAIN_ROUTE)

    # Onboarding is linear: the only route allowed is the recorded step's.
    step_number = profile.onboarding_step if profile is not None else None
    target = resolve_step(step_number).route
    if area == ONBOARDING_AREA and _normalize(current_route) == target:
        return _stay(state)
    return _redirect(state, target)
