"""Active user session handling."""

import logging
import re
from dataclasses import dataclass

from diet_manager.domain.models import Session
from diet_manager.domain.profile import UserProfile
from diet_manager.services.profiles import ProfileService

# Usernames become file names and log record fields.
_USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]*$")

_logger = logging.getLogger(__name__)


@dataclass
class SessionService:
    """Tracks the single logged-in identity of the process."""

    profile_service: ProfileService
    active: Session | None = None

    def login(self, username: str) -> Session | None:
        """Replace the active session with one for the username."""
        cleaned = username.strip()
        if not _USERNAME_PATTERN.match(cleaned):
            return None
        self.active = Session(
            username=cleaned, profile=self.profile_service.load_for(cleaned)
        )
        _logger.info("Session started: username=%s", cleaned)
        return self.active

    def logout(self) -> None:
        """End the active session, if any."""
        if self.active is not None:
            _logger.info("Session ended: username=%s", self.active.username)
        self.active = None

    @property
    def profile(self) -> UserProfile:
        """The active profile, or the default profile when nobody is logged in."""
        if self.active is None:
            return UserProfile()
        return self.active.profile
