"""Daily log store."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol

from diet_manager.domain.foods import Food
from diet_manager.domain.logs import LogEntry

LogBuckets = dict[str, dict[date, list[LogEntry]]]
FoodResolver = Callable[[str, float], Food]


class LogRepository(Protocol):
    """Persistence interface for daily logs."""

    def load_logs(self, resolve_food: FoodResolver) -> LogBuckets:
        """Return stored logs, resolving foods by identifier and calories."""

    def save_logs(self, logs: LogBuckets) -> None:
        """Replace the stored logs."""


@dataclass
class DailyLogService:
    """Per-user, per-date ordered consumption entries."""

    repository: LogRepository
    _logs: LogBuckets = field(default_factory=dict, init=False, repr=False)

    def load(self, resolve_food: FoodResolver) -> None:
        """Hydrate the store from storage."""
        self._logs = self.repository.load_logs(resolve_food)

    def add_entry(self, username: str, day: date, entry: LogEntry) -> None:
        """Append an entry to the user's log for the date, then save."""
        self._logs.setdefault(username, {}).setdefault(day, []).append(entry)
        self._save()

    def remove_entry(self, username: str, day: date, entry: LogEntry) -> bool:
        """Remove the first element that is this exact entry instance."""
        entries = self._logs.get(username, {}).get(day)
        if not entries:
            return False
        for index, candidate in enumerate(entries):
            if candidate is entry:
                del entries[index]
                self._save()
                return True
        return False

    def get_entries(self, username: str, day: date) -> list[LogEntry]:
        """Return a copy of the user's entries for the date."""
        return list(self._logs.get(username, {}).get(day, []))

    def clear_entries(self, username: str, day: date) -> None:
        """Drop the user's bucket for the date, then save."""
        user_logs = self._logs.get(username)
        if user_logs is not None:
            user_logs.pop(day, None)
            if not user_logs:
                self._logs.pop(username, None)
        self._save()

    def dates(self, username: str) -> list[date]:
        """Return the dates with at least one entry, oldest first."""
        user_logs = self._logs.get(username, {})
        return sorted(day for day, entries in user_logs.items() if entries)

    def calories_consumed(self, username: str, day: date) -> float:
        """Return the summed calories of the user's entries for the date."""
        return sum(entry.calories() for entry in self.get_entries(username, day))

    def _save(self) -> None:
        self.repository.save_logs(self._logs)
