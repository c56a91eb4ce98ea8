"""Profile loading, updates and calorie targets."""

from dataclasses import dataclass, replace
from typing import Protocol

from diet_manager.domain.models import Session
from diet_manager.domain.profile import UserProfile
from diet_manager.errors import NoActiveUserError


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def load_profile(self, username: str) -> UserProfile | None:
        """Return the stored profile for a user, if present."""

    def load_legacy_profile(self) -> UserProfile | None:
        """Return the unscoped profile written before per-user profiles."""

    def save_profile(self, profile: UserProfile) -> None:
        """Persist a user's profile."""


@dataclass
class ProfileService:
    """Application service for user profiles."""

    repository: ProfileRepository

    def load_for(self, username: str) -> UserProfile:
        """Return the user's profile, else the legacy one, else defaults."""
        profile = self.repository.load_profile(username)
        if profile is None:
            profile = self.repository.load_legacy_profile()
        if profile is None:
            return UserProfile(username=username)
        return replace(profile, username=username)

    def update_profile(  # noqa: PLR0913
        self,
        session: Session | None,
        *,
        gender: str | None = None,
        height: float | None = None,
        weight: float | None = None,
        age: int | None = None,
        activity_level: str | None = None,
        calculation_method: str | None = None,
    ) -> bool:
        """Apply the given fields to the session's profile and save it.

        Returns False, leaving the profile untouched, when the result would
        have a non-positive body measurement or an unknown gender.
        """
        if session is None:
            raise NoActiveUserError("profile update")
        changes: dict[str, object] = {
            "gender": gender,
            "height": height,
            "weight": weight,
            "age": age,
            "activity_level": activity_level,
            "calculation_method": calculation_method,
        }
        updated = replace(
            session.profile,
            username=session.username,
            **{name: value for name, value in changes.items() if value is not None},
        )
        if not updated.is_valid():
            return False
        session.profile = updated
        self.repository.save_profile(updated)
        return True
