"""Flat-file implementation of the daily log repository."""

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from diet_manager.adapters.flatfile import (
    FIELD_SEPARATOR,
    format_number,
    read_records,
    write_records,
)
from diet_manager.domain.foods import is_valid_amount
from diet_manager.domain.logs import LogEntry
from diet_manager.services.logs import FoodResolver, LogBuckets, LogRepository

LOG_FIELDS = 5

_logger = logging.getLogger(__name__)


@dataclass
class FlatFileLogRepository(LogRepository):
    """Stores entries one per line: ``username|YYYY-MM-DD|food|servings|calories``.

    The calories column is the entry total at save time; it lets an entry be
    restored with a placeholder food when its food is no longer in the catalog.
    """

    path: Path

    def load_logs(self, resolve_food: FoodResolver) -> LogBuckets:
        """Read all entries, grouped by user and date in file order."""
        logs: LogBuckets = {}
        for line in read_records(self.path):
            fields = line.split(FIELD_SEPARATOR)
            if len(fields) != LOG_FIELDS:
                _logger.warning("Skipping malformed log record: %s", line)
                continue
            username, raw_day, food_id, raw_servings, raw_calories = fields
            try:
                day = date.fromisoformat(raw_day)
                servings = float(raw_servings)
                calories = float(raw_calories)
            except ValueError:
                _logger.warning("Skipping malformed log record: %s", line)
                continue
            if (
                not username
                or not is_valid_amount(servings, positive=True)
                or not is_valid_amount(calories)
            ):
                _logger.warning("Skipping invalid log record: %s", line)
                continue
            food = resolve_food(food_id, calories / servings)
            logs.setdefault(username, {}).setdefault(day, []).append(
                LogEntry(food=food, servings=servings)
            )
        return logs

    def save_logs(self, logs: LogBuckets) -> None:
        """Rewrite the file with every user's entries."""
        lines = [
            FIELD_SEPARATOR.join(
                [
                    username,
                    day.isoformat(),
                    entry.food.identifier,
                    format_number(entry.servings),
                    format_number(entry.calories()),
                ]
            )
            for username, days in logs.items()
            for day, entries in sorted(days.items())
            for entry in entries
        ]
        write_records(self.path, lines)
