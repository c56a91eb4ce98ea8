"""Flat-file implementation of the profile repository."""

import logging
from dataclasses import dataclass
from pathlib import Path

from diet_manager.adapters.flatfile import format_number, read_records, write_records
from diet_manager.domain.profile import UserProfile
from diet_manager.services.profiles import ProfileRepository

LEGACY_PROFILE_FILE = "profile.txt"
PROFILE_SUFFIX = "_profile.txt"

_logger = logging.getLogger(__name__)


@dataclass
class FlatFileProfileRepository(ProfileRepository):
    """Stores each profile as ``key=value`` lines in ``<username>_profile.txt``."""

    directory: Path

    def load_profile(self, username: str) -> UserProfile | None:
        """Return the user's stored profile, if present and readable."""
        return self._read(self.directory / f"{username}{PROFILE_SUFFIX}", username)

    def load_legacy_profile(self) -> UserProfile | None:
        """Return the unscoped profile, if present and readable."""
        return self._read(self.directory / LEGACY_PROFILE_FILE, None)

    def save_profile(self, profile: UserProfile) -> None:
        """Write the profile to its user-specific file."""
        if profile.username is None:
            _logger.warning("Cannot save profile without a username")
            return
        lines = [
            f"# Diet manager profile for {profile.username}",
            f"gender={profile.gender}",
            f"height={format_number(profile.height)}",
            f"weight={format_number(profile.weight)}",
            f"age={profile.age}",
            f"activityLevel={profile.activity_level}",
            f"calorieCalculationMethod={profile.calculation_method}",
        ]
        write_records(self.directory / f"{profile.username}{PROFILE_SUFFIX}", lines)

    def _read(self, path: Path, username: str | None) -> UserProfile | None:
        if not path.exists():
            return None
        values: dict[str, str] = {}
        for line in read_records(path):
            key, separator, value = line.partition("=")
            if separator:
                values[key.strip()] = value.strip()
        defaults = UserProfile(username=username)
        try:
            profile = UserProfile(
                username=username,
                gender=values.get("gender", defaults.gender),
                height=float(values.get("height", defaults.height)),
                weight=float(values.get("weight", defaults.weight)),
                age=int(values.get("age", defaults.age)),
                activity_level=values.get("activityLevel", defaults.activity_level),
                calculation_method=values.get(
                    "calorieCalculationMethod", defaults.calculation_method
                ),
            )
        except ValueError:
            _logger.warning("Ignoring unreadable profile file: %s", path)
            return None
        if not profile.is_valid():
            _logger.warning("Ignoring invalid profile file: %s", path)
            return None
        return profile
