"""Domain models for daily consumption logs."""

from dataclasses import dataclass
from datetime import date

from diet_manager.domain.foods import Food


@dataclass(frozen=True, eq=False)
class LogEntry:
    """A food eaten in some number of servings.

    Entries compare by identity: two entries built from the same food and
    servings are still distinct log rows.
    """

    food: Food
    servings: float

    def calories(self) -> float:
        """Return the calories of this entry at the food's current value."""
        return self.food.calories_per_serving() * self.servings


@dataclass(frozen=True)
class DailySummary:
    """Consumption and target for one user on one date."""

    day: date
    entries: list[LogEntry]
    consumed: float
    target: float

    @property
    def remaining(self) -> float:
        """Calories left for the day; negative when over target."""
        return self.target - self.consumed
