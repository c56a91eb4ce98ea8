"""Reversible commands applied to the daily log."""

from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Protocol

from diet_manager.domain.foods import Food
from diet_manager.domain.logs import LogEntry


class EntryStore(Protocol):
    """The log mutations commands are allowed to perform."""

    def add_entry(self, username: str, day: date, entry: LogEntry) -> None:
        """Append an entry to a user's log for a date."""

    def remove_entry(self, username: str, day: date, entry: LogEntry) -> bool:
        """Remove an entry instance from a user's log for a date."""


@dataclass(eq=False)
class AddEntryCommand:
    """Log a food; undo removes exactly the entry the last run created."""

    kind: ClassVar[str] = "add"

    username: str
    day: date
    food: Food
    servings: float
    entry: LogEntry | None = None

    def apply(self, store: EntryStore) -> None:
        """Create a fresh entry and append it."""
        self.entry = LogEntry(self.food, self.servings)
        store.add_entry(self.username, self.day, self.entry)

    def revert(self, store: EntryStore) -> None:
        """Remove the entry created by the last apply."""
        if self.entry is not None:
            store.remove_entry(self.username, self.day, self.entry)

    def describe(self) -> str:
        """Return a human readable summary."""
        return (
            f"Add {self.servings:g} x {self.food.identifier} "
            f"for {self.username} on {self.day.isoformat()}"
        )


@dataclass(eq=False)
class RemoveEntryCommand:
    """Remove an existing entry; undo appends the same instance back."""

    kind: ClassVar[str] = "remove"

    username: str
    day: date
    entry: LogEntry

    @property
    def food(self) -> Food:
        """The food of the removed entry."""
        return self.entry.food

    @property
    def servings(self) -> float:
        """The servings of the removed entry."""
        return self.entry.servings

    def apply(self, store: EntryStore) -> None:
        """Remove the entry instance."""
        store.remove_entry(self.username, self.day, self.entry)

    def revert(self, store: EntryStore) -> None:
        """Append the entry instance to the end of the date's log."""
        store.add_entry(self.username, self.day, self.entry)

    def describe(self) -> str:
        """Return a human readable summary."""
        return (
            f"Remove {self.servings:g} x {self.food.identifier} "
            f"for {self.username} on {self.day.isoformat()}"
        )


LogCommand = AddEntryCommand | RemoveEntryCommand
