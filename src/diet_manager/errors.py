"""Exceptions raised by the diet manager."""


class DietManagerError(Exception):
    """Base class for diet manager errors."""


class NoActiveUserError(DietManagerError):
    """Raised when a log or profile operation runs without a logged-in user."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"No active user for {operation}")
        self.operation = operation
