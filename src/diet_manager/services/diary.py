"""Diary operations for the active user."""

from dataclasses import dataclass
from datetime import date

from diet_manager.domain.foods import Food, is_valid_amount
from diet_manager.domain.history import AddEntryCommand, RemoveEntryCommand
from diet_manager.domain.logs import DailySummary, LogEntry
from diet_manager.domain.models import Session
from diet_manager.errors import NoActiveUserError
from diet_manager.services.catalog import FoodCatalogService
from diet_manager.services.history import CommandHistory
from diet_manager.services.logs import DailyLogService


@dataclass
class DiaryService:
    """Routes log mutations through the command history."""

    catalog: FoodCatalogService
    logs: DailyLogService
    history: CommandHistory

    def add_food_to_log(
        self, session: Session | None, day: date, food: Food, servings: float
    ) -> LogEntry | None:
        """Log servings of a catalog food; None when rejected."""
        active = _require(session, "adding to the log")
        if not is_valid_amount(servings, positive=True):
            return None
        if self.catalog.get_by_identifier(food.identifier) is not food:
            return None
        command = AddEntryCommand(
            username=active.username, day=day, food=food, servings=servings
        )
        self.history.perform(command)
        return command.entry

    def remove_food_from_log(
        self, session: Session | None, day: date, index: int
    ) -> bool:
        """Remove the entry at a position of the date's log."""
        active = _require(session, "removing from the log")
        entries = self.logs.get_entries(active.username, day)
        if index < 0 or index >= len(entries):
            return False
        self.history.perform(
            RemoveEntryCommand(username=active.username, day=day, entry=entries[index])
        )
        return True

    def clear_log(self, session: Session | None, day: date) -> None:
        """Clear every entry of the date's log."""
        active = _require(session, "clearing the log")
        self.logs.clear_entries(active.username, day)

    def entries(self, session: Session | None, day: date) -> list[LogEntry]:
        """Return the date's entries for the active user."""
        active = _require(session, "reading the log")
        return self.logs.get_entries(active.username, day)

    def dates(self, session: Session | None) -> list[date]:
        """Return the dates the active user has logged food on."""
        active = _require(session, "reading the log")
        return self.logs.dates(active.username)

    def calories_consumed(self, session: Session | None, day: date) -> float:
        """Return the calories eaten on a date."""
        active = _require(session, "reading the log")
        return self.logs.calories_consumed(active.username, day)

    def target_calories(self, session: Session | None) -> float:
        """Return the active profile's daily calorie target."""
        active = _require(session, "reading the calorie target")
        return active.profile.daily_calories()

    def remaining_calories(self, session: Session | None, day: date) -> float:
        """Return target minus consumed; negative when over target."""
        return self.target_calories(session) - self.calories_consumed(session, day)

    def summary(self, session: Session | None, day: date) -> DailySummary:
        """Return entries, consumption and target for a date."""
        entries = self.entries(session, day)
        return DailySummary(
            day=day,
            entries=entries,
            consumed=sum(entry.calories() for entry in entries),
            target=self.target_calories(session),
        )

    def undo(self) -> bool:
        """Undo the latest log command."""
        return self.history.undo()

    def redo(self) -> bool:
        """Redo the latest undone log command."""
        return self.history.redo()


def _require(session: Session | None, operation: str) -> Session:
    if session is None:
        raise NoActiveUserError(operation)
    return session
