"""Route guard decisions and the onboarding step table."""

import pytest
from types import SimpleNamespace

from app.modules.onboarding.navigation import (
    AUTH_ROUTE,
    MAIN_ROUTE,
    AuthState,
    NavigationAction,
    resolve_navigation,
    route_area,
)
from app.modules.onboarding.steps import (
    STEP_ROUTES,
    OnboardingStep,
    StepLookup,
    resolve_step,
)
from app.modules.profiles.schemas import Profile

USER = SimpleNamespace(id="user-1", email="ada@example.com")

ROUTES = [
    "/",
    "/(auth)",
    "/auth/signin",
    "/(tabs)",
    "/(tabs)/messages",
    "/(modal)/edit-profile",
    "/(onboarding)/name",
    "/(onboarding)/photos",
    "/(onboarding)/location",
]


def profile(step=None, completed=False):
    return Profile(id="user-1", onboardingStep=step, onboardingCompleted=completed)


def test_step_table_has_ten_distinct_routes():
    assert len(STEP_ROUTES) == 10
    assert len(set(STEP_ROUTES.values())) == 10
    assert OnboardingStep.DOB.route == "/(onboarding)/dob"
    assert OnboardingStep.LOCATION.next is None
    assert OnboardingStep.PHOTOS.next is OnboardingStep.PROMPTS


@pytest.mark.parametrize("step_number", range(1, 11))
def test_resolve_step_exact(step_number):
    resolved = resolve_step(step_number)
    assert resolved.lookup is StepLookup.EXACT
    assert resolved.step == step_number


def test_resolve_step_missing_defaults_to_first():
    resolved = resolve_step(None)
    assert resolved.lookup is StepLookup.MISSING
    assert resolved.step is OnboardingStep.NAME


@pytest.mark.parametrize("step_number", [0, -1, 11, 42])
def test_resolve_step_unmapped_defaults_to_first(step_number):
    resolved = resolve_step(step_number)
    assert resolved.lookup is StepLookup.UNMAPPED
    assert resolved.route == "/(onboarding)/name"


def test_route_area():
    assert route_area("/(onboarding)/dob") == "(onboarding)"
    assert route_area("/(tabs)?tab=likes") == "(tabs)"
    assert route_area("/") == ""


def test_loading_suspends_routing():
    decision = resolve_navigation(None, None, "/(tabs)", loading=True)
    assert decision.action is NavigationAction.SUSPEND
    assert decision.target is None


@pytest.mark.parametrize("step_number", range(1, 11))
@pytest.mark.parametrize("current", ROUTES)
def test_onboarding_user_is_sent_to_recorded_step(step_number, current):
    target = STEP_ROUTES[OnboardingStep(step_number)]
    decision = resolve_navigation(USER, profile(step_number), current)
    assert decision.state is AuthState.ONBOARDING_IN_PROGRESS
    if current == target:
        assert decision.action is NavigationAction.STAY
    else:
        assert decision.action is NavigationAction.REDIRECT
        assert decision.target == target


@pytest.mark.parametrize("step_number", range(1, 11))
def test_on_recorded_step_is_noop(step_number):
    target = STEP_ROUTES[OnboardingStep(step_number)]
    decision = resolve_navigation(USER, profile(step_number), target)
    assert decision.action is NavigationAction.STAY
    assert not decision.should_redirect


def test_user_without_profile_starts_onboarding():
    decision = resolve_navigation(USER, None, "/(tabs)")
    assert decision.state is AuthState.NEEDS_ONBOARDING
    assert decision.target == "/(onboarding)/name"


def test_profile_without_step_is_step_one():
    decision = resolve_navigation(USER, profile(None), "/(onboarding)/gender")
    assert decision.target == "/(onboarding)/name"


def test_unknown_step_falls_back_to_first_step():
    decision = resolve_navigation(USER, profile(99), "/(onboarding)/prompts")
    assert decision.action is NavigationAction.REDIRECT
    assert decision.target == "/(onboarding)/name"


@pytest.mark.parametrize("current", ["/", "/(auth)", "/auth/signin", "/(onboarding)/location"])
def test_completed_profile_goes_to_main_app(current):
    decision = resolve_navigation(USER, profile(10, completed=True), current)
    assert decision.state is AuthState.ACTIVE
    assert decision.target == MAIN_ROUTE


@pytest.mark.parametrize("current", ["/(tabs)", "/(tabs)/profile", "/(modal)/edit-profile", "/modal"])
def test_completed_profile_stays_in_main_or_modal(current):
    decision = resolve_navigation(USER, profile(10, completed=True), current)
    assert decision.action is NavigationAction.STAY


@pytest.mark.parametrize("current", ["/", "/(tabs)", "/(onboarding)/dob", "/(modal)/edit-profile"])
def test_signed_out_goes_to_auth(current):
    decision = resolve_navigation(None, None, current)
    assert decision.state is AuthState.UNAUTHENTICATED
    assert decision.target == AUTH_ROUTE


@pytest.mark.parametrize("current", ["/(auth)", "/auth/signin", "/auth/signup"])
def test_signed_out_stays_in_auth(current):
    decision = resolve_navigation(None, profile(3), current)
    assert decision.action is NavigationAction.STAY
