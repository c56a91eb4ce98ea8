"""Domain models for the diet manager."""

from dataclasses import dataclass

from diet_manager.domain.profile import UserProfile


@dataclass
class Session:
    """The logged-in identity and its active profile."""

    username: str
    profile: UserProfile
