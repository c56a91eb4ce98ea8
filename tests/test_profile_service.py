"""Tests for profile and session services."""

import pytest

from diet_manager.domain.models import Session
from diet_manager.domain.profile import UserProfile
from diet_manager.errors import NoActiveUserError
from diet_manager.services.profiles import ProfileService
from diet_manager.services.sessions import SessionService
from tests.conftest import InMemoryProfileRepository


def test_load_for_prefers_user_profile() -> None:
    repository = InMemoryProfileRepository(
        profiles={"alice": UserProfile(username="alice", age=41)},
        legacy=UserProfile(age=70),
    )

    profile = ProfileService(repository).load_for("alice")

    assert profile.age == 41


def test_load_for_falls_back_to_legacy_profile() -> None:
    repository = InMemoryProfileRepository(legacy=UserProfile(age=70))

    profile = ProfileService(repository).load_for("bob")

    assert profile.age == 70
    assert profile.username == "bob"


def test_load_for_uses_defaults() -> None:
    profile = ProfileService(InMemoryProfileRepository()).load_for("carol")

    assert profile == UserProfile(username="carol")


def test_update_profile_saves_changes() -> None:
    repository = InMemoryProfileRepository()
    service = ProfileService(repository)
    session = Session(username="alice", profile=UserProfile(username="alice"))

    assert service.update_profile(
        session, gender="male", weight=80, activity_level="active"
    )

    assert session.profile.gender == "male"
    assert session.profile.weight == 80
    assert session.profile.height == 165
    assert repository.profiles["alice"] == session.profile


def test_update_profile_rejects_invalid_values() -> None:
    repository = InMemoryProfileRepository()
    service = ProfileService(repository)
    original = UserProfile(username="alice")
    session = Session(username="alice", profile=original)

    assert not service.update_profile(session, height=0, weight=90)
    assert not service.update_profile(session, age=-3)
    assert not service.update_profile(session, gender="robot")

    assert session.profile is original
    assert repository.saves == 0


def test_update_profile_requires_session() -> None:
    service = ProfileService(InMemoryProfileRepository())

    with pytest.raises(NoActiveUserError):
        service.update_profile(None, age=40)


def test_login_replaces_profile() -> None:
    repository = InMemoryProfileRepository(
        profiles={"bob": UserProfile(username="bob", gender="male")}
    )
    sessions = SessionService(ProfileService(repository))

    alice = sessions.login("alice")
    bob = sessions.login(" bob ")

    assert alice is not None
    assert bob is not None
    assert sessions.active is bob
    assert sessions.profile.gender == "male"
    assert sessions.profile.username == "bob"


@pytest.mark.parametrize("username", ["", "   ", "../etc", "a|b", "two words"])
def test_login_rejects_unusable_usernames(username: str) -> None:
    sessions = SessionService(ProfileService(InMemoryProfileRepository()))

    assert sessions.login(username) is None
    assert sessions.active is None


def test_logout_restores_default_profile() -> None:
    sessions = SessionService(ProfileService(InMemoryProfileRepository()))
    sessions.login("alice")

    sessions.logout()

    assert sessions.active is None
    assert sessions.profile == UserProfile()
