"""Onboarding step screens: validate, persist, refresh, navigate."""

import pytest
from datetime import date
from unittest.mock import MagicMock

from app.client.api_client import ApiError, UploadedPhoto
from app.client.selections import LocalPhoto, PhotoSelection, PromptSelection
from app.client.session import AuthStateHolder, Session, SessionUser
from app.client.screens import (
    SCREENS,
    AvailabilityScreen,
    Coordinates,
    DateOfBirthInput,
    DateOfBirthScreen,
    GenderScreen,
    HeightScreen,
    LocationScreen,
    NameInput,
    NameScreen,
    PhotosScreen,
    PromptsInput,
    PromptsScreen,
)
from app.modules.onboarding.catalog import PREDEFINED_PROMPTS
from app.modules.onboarding.steps import OnboardingStep
from app.modules.profiles.schemas import Photo, Profile

ADA = SessionUser(id="user-1", email="ada@example.com")


class StaticSessionProvider:
    def __init__(self, session):
        self.session = session

    def get_session(self):
        return self.session

    def on_auth_state_change(self, callback):
        return MagicMock()

    def sign_in_with_id_token(self, credential):
        return None

    def sign_out(self):
        pass


@pytest.fixture
def profiles():
    service = MagicMock()
    service.get_profile.return_value = Profile(id="user-1", onboardingStep=2, height="5 10")
    return service


@pytest.fixture
def auth(profiles):
    holder = AuthStateHolder(StaticSessionProvider(Session(user=ADA)), profiles)
    holder.initialize()
    profiles.get_profile.reset_mock()
    return holder


def test_every_step_has_a_screen():
    assert set(SCREENS) == set(OnboardingStep)


def test_dob_day_before_eighteenth_birthday_is_rejected(auth, profiles):
    screen = DateOfBirthScreen(auth, profiles, today=lambda: date(2024, 6, 14))
    outcome = screen.submit(DateOfBirthInput("15", "06", "2006"))
    assert not outcome.ok
    assert outcome.navigate_to is None
    assert outcome.error_title == "Must be 18 or above"
    profiles.save_step.assert_not_called()


def test_dob_on_eighteenth_birthday_advances(auth, profiles):
    screen = DateOfBirthScreen(auth, profiles, today=lambda: date(2024, 6, 15))
    outcome = screen.submit(DateOfBirthInput("15", "06", "2006"))
    assert outcome.ok
    assert outcome.navigate_to == "/(onboarding)/gender"
    profiles.save_step.assert_called_once_with(
        "user-1", advance_to=3, user_values={"dob": "2006-06-15"}
    )
    profiles.get_profile.assert_called_once_with("user-1")


def test_name_step_creates_user_row(auth, profiles):
    outcome = NameScreen(auth, profiles).submit(NameInput(" Ada ", "Lovelace"))
    assert outcome.navigate_to == "/(onboarding)/dob"
    profiles.save_step.assert_called_once_with(
        "user-1",
        advance_to=2,
        user_values={"email": "ada@example.com", "displayName": "Ada", "surname": "Lovelace"},
        create_user=True,
    )


def test_revisiting_earlier_step_keeps_recorded_progress(auth, profiles):
    auth.profile = Profile(id="user-1", onboardingStep=8)
    outcome = GenderScreen(auth, profiles).submit("MALE")
    assert outcome.ok
    profiles.save_step.assert_called_once_with("user-1", advance_to=8, user_values={"gender": "MALE"})


def test_save_failure_keeps_user_on_step(auth, profiles):
    profiles.save_step.side_effect = Exception("connection reset")
    outcome = GenderScreen(auth, profiles).submit("FEMALE")
    assert not outcome.ok
    assert outcome.navigate_to is None
    assert outcome.error == "Failed to save gender."
    profiles.get_profile.assert_not_called()


def test_no_user_is_reported(profiles):
    holder = AuthStateHolder(StaticSessionProvider(None), profiles)
    holder.initialize()
    outcome = GenderScreen(holder, profiles).submit("FEMALE")
    assert outcome.error == "No authenticated user found."
    profiles.save_step.assert_not_called()


def test_height_prefills_from_profile(auth, profiles):
    screen = HeightScreen(auth, profiles)
    assert screen.initial_value() == 70
    screen.submit(71)
    profiles.save_step.assert_called_once_with("user-1", advance_to=7, user_values={"height": "5 11"})


def test_availability_writes_profiles_row(auth, profiles):
    outcome = AvailabilityScreen(auth, profiles).submit(0)
    assert outcome.navigate_to == "/(onboarding)/photos"
    _, kwargs = profiles.save_step.call_args
    assert kwargs["profile_values"]["availableNext8Days"][0] is True


def test_photos_screen_uploads_pending_then_advances(auth, profiles):
    api = MagicMock()
    api.upload_photo.side_effect = [
        UploadedPhoto(key="k0", id="p0", imageUrl="k0", position=0, isPrimary=True),
        UploadedPhoto(key="k1", id="p1", imageUrl="k1", position=1),
    ]
    selection = PhotoSelection()
    selection.add(LocalPhoto(b"a"), LocalPhoto(b"b", "b.png", "image/png"))

    outcome = PhotosScreen(auth, profiles, api).submit(selection)

    assert outcome.navigate_to == "/(onboarding)/prompts"
    assert api.upload_photo.call_count == 2
    api.upload_photo.assert_called_with(b"b", "b.png", "image/png")
    assert selection.pending() == []
    profiles.save_step.assert_called_once_with("user-1", advance_to=9)


def test_photos_screen_retry_skips_uploaded_slots(auth, profiles):
    api = MagicMock()
    api.upload_photo.side_effect = [
        UploadedPhoto(key="k0", id="p0", imageUrl="k0", position=0),
        ApiError(500, "Upload failed"),
        UploadedPhoto(key="k1", id="p1", imageUrl="k1", position=1),
    ]
    selection = PhotoSelection()
    selection.add(LocalPhoto(b"a"), LocalPhoto(b"b"))
    screen = PhotosScreen(auth, profiles, api)

    assert not screen.submit(selection).ok
    assert len(selection.pending()) == 1
    assert screen.submit(selection).ok
    assert api.upload_photo.call_count == 3


def test_removed_uploaded_photo_is_deleted_before_new_upload(auth, profiles):
    existing = [Photo(id=f"p{i}", imageUrl=f"k{i}", position=i) for i in range(6)]
    calls = []
    api = MagicMock()
    api.delete_photo.side_effect = lambda photo_id: calls.append(("delete", photo_id))

    def upload(content, filename, content_type):
        calls.append(("upload", filename))
        return UploadedPhoto(key="k6", id="p6", imageUrl="k6", position=5)

    api.upload_photo.side_effect = upload
    selection = PhotoSelection(existing)
    selection.remove(0)
    selection.add(LocalPhoto(b"new", "new.jpg"))

    outcome = PhotosScreen(auth, profiles, api).submit(selection)

    assert outcome.ok
    assert calls == [("delete", "p0"), ("upload", "new.jpg")]
    assert selection.removed == []


def test_removing_unsent_photo_needs_no_delete(auth, profiles):
    api = MagicMock()
    api.upload_photo.return_value = UploadedPhoto(key="k", id="p", imageUrl="k", position=0)
    selection = PhotoSelection()
    selection.add(LocalPhoto(b"a"), LocalPhoto(b"b"), LocalPhoto(b"c"))
    selection.remove(2)

    PhotosScreen(auth, profiles, api).submit(selection)

    api.delete_photo.assert_not_called()


def test_failed_delete_is_retried_on_next_submit(auth, profiles):
    existing = [Photo(id=f"p{i}", imageUrl=f"k{i}", position=i) for i in range(3)]
    api = MagicMock()
    api.delete_photo.side_effect = [ApiError(500, "Internal server error"), None]
    selection = PhotoSelection(existing)
    selection.remove(1)
    screen = PhotosScreen(auth, profiles, api)

    assert not screen.submit(selection).ok
    assert [p.id for p in selection.removed] == ["p1"]
    assert screen.submit(selection).ok
    assert api.delete_photo.call_count == 2


def test_photos_screen_needs_two_photos(auth, profiles):
    selection = PhotoSelection()
    selection.add(LocalPhoto(b"a"))
    outcome = PhotosScreen(auth, profiles, MagicMock()).submit(selection)
    assert outcome.error_title == "Minimum Photos"


def test_prompts_screen_saves_prompts_and_bio(auth, profiles):
    selection = PromptSelection()
    selection.set(0, PREDEFINED_PROMPTS[0], "Kindness")
    outcome = PromptsScreen(auth, profiles).submit(PromptsInput(selection, "  Hi there "))
    assert outcome.navigate_to == "/(onboarding)/location"
    _, kwargs = profiles.save_step.call_args
    assert kwargs["profile_values"]["bio"] == "Hi there"
    assert kwargs["profile_values"]["prompts"][0]["answer"] == "Kindness"


def test_location_completes_onboarding(auth, profiles):
    outcome = LocationScreen(auth, profiles).submit(Coordinates(51.5, -0.12))
    assert outcome.navigate_to == "/(tabs)"
    profiles.set_location.assert_called_once_with("user-1", 51.5, -0.12)
    profiles.save_step.assert_called_once_with("user-1", complete=True)


def test_location_can_be_skipped(auth, profiles):
    outcome = LocationScreen(auth, profiles).submit(None)
    assert outcome.ok
    profiles.set_location.assert_not_called()
