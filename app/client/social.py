"""
Federated sign-in (Google, Apple).

A provider talks to the platform SDK and hands back an identity token; the
session provider exchanges that token for a Supabase session. Providers report
failures as SocialSignInError carrying the SDK's status code so the caller can
tell a user cancelling the sheet from a real failure.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Protocol

GOOGLE = "google"
APPLE = "apple"

# Google Sign-In status codes
SIGN_IN_CANCELLED = "SIGN_IN_CANCELLED"
IN_PROGRESS = "IN_PROGRESS"
PLAY_SERVICES_NOT_AVAILABLE = "PLAY_SERVICES_NOT_AVAILABLE"

# expo-apple-authentication codes; both spellings occur
ERR_CANCELED = "ERR_CANCELED"
ERR_CANCELLED = "ERR_CANCELLED"

CANCELLATION_CODES: Dict[str, FrozenSet[str]] = {
    GOOGLE: frozenset({SIGN_IN_CANCELLED, IN_PROGRESS}),
    APPLE: frozenset({ERR_CANCELED, ERR_CANCELLED}),
}


class SocialSignInError(Exception):
    def __init__(self, code: str, message: Optional[str] = None):
        super().__init__(message or code)
        self.code = code
        self.message = message or code


@dataclass(frozen=True)
class FederatedCredential:
    provider: str
    id_token: str
    nonce: Optional[str] = None
    access_token: Optional[str] = None


class FederatedProvider(Protocol):
    name: str

    def sign_in(self) -> FederatedCredential:
        ...

    def sign_out(self) -> None:
        ...


def is_cancellation(provider: str, error: SocialSignInError) -> bool:
    return error.code in CANCELLATION_CODES.get(provider, frozenset())
