"""
Auth state for the mobile client.

AuthStateHolder owns who is signed in and their profile row. It is created
once per app start, initialized, and torn down with close(); screens and the
route guard read it and call its mutators instead of reaching for globals.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol
import logging

from app.client.profile_cache import ProfileCache
from app.client.social import (
    FederatedProvider,
    PLAY_SERVICES_NOT_AVAILABLE,
    SocialSignInError,
    is_cancellation,
)
from app.modules.onboarding.navigation import NavigationDecision, resolve_navigation
from app.modules.profiles.schemas import Profile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    id: str
    email: Optional[str] = None


@dataclass(frozen=True)
class Session:
    user: SessionUser
    access_token: Optional[str] = None


class Subscription(Protocol):
    def unsubscribe(self) -> None:
        ...


class SessionProvider(Protocol):
    def get_session(self) -> Optional[Session]:
        ...

    def on_auth_state_change(self, callback: Callable[[str, Optional[Session]], None]) -> Subscription:
        ...

    def sign_in_with_id_token(self, credential) -> Optional[Session]:
        ...

    def sign_out(self) -> None:
        ...


class ProfileSource(Protocol):
    def get_profile(self, user_id: str) -> Optional[Profile]:
        ...


@dataclass(frozen=True)
class AuthSnapshot:
    user: Optional[SessionUser]
    profile: Optional[Profile]
    loading: bool


@dataclass(frozen=True)
class SignInResult:
    user: Optional[SessionUser]


Listener = Callable[[AuthSnapshot], None]


class AuthStateHolder:
    def __init__(
        self,
        session_provider: SessionProvider,
        profiles: ProfileSource,
        cache: Optional[ProfileCache] = None,
        google: Optional[FederatedProvider] = None,
        apple: Optional[FederatedProvider] = None,
    ):
        self.session_provider = session_provider
        self.profiles = profiles
        self.cache = cache
        self.google = google
        self.apple = apple

        self.user: Optional[SessionUser] = None
        self.profile: Optional[Profile] = None
        self.loading = True
        self._subscription: Optional[Subscription] = None
        self._listeners: List[Listener] = []

    # lifecycle

    def initialize(self) -> None:
        """Restore cached profile, resolve the current session, then follow auth changes."""
        if self.cache is not None:
            cached = self.cache.load()
            if cached is not None:
                self.profile = cached
                self._notify()

        try:
            session = self.session_provider.get_session()
            self.user = session.user if session else None
            self._drop_foreign_profile()
            if self.user is not None:
                self._fetch_profile(self.user.id)
        except Exception as e:
            logger.error(f"Error initializing auth: {e}")
        finally:
            self.loading = False
            self._notify()

        self._subscription = self.session_provider.on_auth_state_change(self._on_auth_state_change)

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self._listeners.clear()

    # observers

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def snapshot(self) -> AuthSnapshot:
        return AuthSnapshot(user=self.user, profile=self.profile, loading=self.loading)

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    # session events

    def _on_auth_state_change(self, event: str, session: Optional[Session]) -> None:
        logger.debug(f"Auth state change: {event}")
        self.user = session.user if session else None
        self._drop_foreign_profile()
        if self.user is not None:
            self._fetch_profile(self.user.id)
        self._notify()

    def _drop_foreign_profile(self) -> None:
        """A profile is only kept while it belongs to the signed-in user."""
        if self.profile is None:
            return
        if self.user is None or self.profile.id != self.user.id:
            self.profile = None
            if self.cache is not None:
                self.cache.clear()

    def _fetch_profile(self, user_id: str) -> None:
        """On failure the current profile is left as is."""
        try:
            profile = self.profiles.get_profile(user_id)
        except Exception as e:
            logger.error(f"Error fetching profile: {e}")
            return
        if profile is not None and profile.id != user_id:
            logger.warning(f"Discarding profile {profile.id} fetched for user {user_id}")
            profile = None
        self.profile = profile
        if self.cache is not None:
            if profile is None:
                self.cache.clear()
            else:
                self.cache.save(profile)

    # mutators

    def refresh_profile(self) -> None:
        if self.user is not None:
            self._fetch_profile(self.user.id)
            self._notify()

    def sign_in_with_google(self) -> Optional[SignInResult]:
        return self._federated_sign_in(self.google)

    def sign_in_with_apple(self) -> Optional[SignInResult]:
        return self._federated_sign_in(self.apple)

    def _federated_sign_in(self, provider: Optional[FederatedProvider]) -> Optional[SignInResult]:
        """None means the user backed out; nothing to report and nowhere to go."""
        if provider is None:
            raise SocialSignInError("NOT_CONFIGURED", "This sign-in method is not available")
        try:
            credential = provider.sign_in()
        except SocialSignInError as e:
            if is_cancellation(provider.name, e):
                logger.info(f"{provider.name} sign in cancelled ({e.code})")
                return None
            if e.code == PLAY_SERVICES_NOT_AVAILABLE:
                raise SocialSignInError(e.code, "Play services not available") from e
            logger.error(f"{provider.name} sign in error: {e}")
            raise

        # the auth state listener picks up the new session and loads the profile
        session = self.session_provider.sign_in_with_id_token(credential)
        return SignInResult(user=session.user if session else self.user)

    def sign_out(self) -> None:
        try:
            self.session_provider.sign_out()
            if self.google is not None:
                self.google.sign_out()
        except Exception as e:
            logger.error(f"Sign out error: {e}")
        finally:
            if self.cache is not None:
                self.cache.clear()
            self.profile = None
            self.user = None
            self._notify()


class OnboardingGuard:
    """Binds the route decision to live auth state."""

    def __init__(self, auth: AuthStateHolder):
        self.auth = auth

    def evaluate(self, current_route: str) -> NavigationDecision:
        return resolve_navigation(
            self.auth.user, self.auth.profile, current_route, loading=self.auth.loading
        )
