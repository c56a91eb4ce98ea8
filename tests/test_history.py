"""Tests for the undo/redo command history."""

from datetime import date

from diet_manager.domain.foods import AtomicFood
from diet_manager.domain.history import AddEntryCommand, RemoveEntryCommand
from diet_manager.domain.logs import LogEntry
from diet_manager.services.history import CommandHistory
from diet_manager.services.logs import DailyLogService
from tests.conftest import InMemoryLogRepository

DAY = date(2024, 3, 1)
APPLE = AtomicFood("apple", ("fruit",), 95)
BREAD = AtomicFood("bread", ("grain",), 80)


def _add(food: AtomicFood = APPLE, servings: float = 1) -> AddEntryCommand:
    return AddEntryCommand(username="alice", day=DAY, food=food, servings=servings)


def test_perform_then_undo_restores_previous_entries(
    log_service: DailyLogService, history: CommandHistory
) -> None:
    existing = LogEntry(BREAD, 1)
    log_service.add_entry("alice", DAY, existing)

    history.perform(_add())
    assert len(log_service.get_entries("alice", DAY)) == 2

    assert history.undo()

    assert log_service.get_entries("alice", DAY) == [existing]


def test_undo_removes_the_exact_entry_added(
    log_service: DailyLogService, history: CommandHistory
) -> None:
    lookalike = LogEntry(APPLE, 1)
    log_service.add_entry("alice", DAY, lookalike)
    command = _add()

    history.perform(command)
    history.undo()

    assert log_service.get_entries("alice", DAY) == [lookalike]
    assert command.entry is not lookalike


def test_redo_restores_calories(
    log_service: DailyLogService, history: CommandHistory
) -> None:
    history.perform(_add(BREAD, 2))
    after_add = log_service.calories_consumed("alice", DAY)

    history.undo()
    assert log_service.calories_consumed("alice", DAY) == 0
    assert history.redo()

    assert log_service.calories_consumed("alice", DAY) == after_add == 160


def test_undo_and_redo_on_empty_stacks(history: CommandHistory) -> None:
    assert not history.can_undo
    assert not history.can_redo
    assert not history.undo()
    assert not history.redo()


def test_remove_command_undo_appends_entry(
    log_service: DailyLogService, history: CommandHistory
) -> None:
    first = LogEntry(APPLE, 1)
    second = LogEntry(BREAD, 1)
    third = LogEntry(APPLE, 2)
    for entry in (first, second, third):
        log_service.add_entry("alice", DAY, entry)

    history.perform(RemoveEntryCommand(username="alice", day=DAY, entry=first))
    assert log_service.get_entries("alice", DAY) == [second, third]

    history.undo()

    assert log_service.get_entries("alice", DAY) == [second, third, first]


def test_commands_persist_every_change() -> None:
    repository = InMemoryLogRepository()
    history = CommandHistory(store=DailyLogService(repository))

    history.perform(_add())
    history.undo()
    history.redo()

    assert repository.saves == 3
    assert repository.stored["alice"][DAY] == [("apple", 1)]


def test_new_command_keeps_redo_stack_by_default(
    log_service: DailyLogService, history: CommandHistory
) -> None:
    history.perform(_add(APPLE))
    history.undo()

    history.perform(_add(BREAD))

    assert history.can_redo
    assert history.redo()
    foods = [entry.food for entry in log_service.get_entries("alice", DAY)]
    assert foods == [BREAD, APPLE]


def test_new_command_can_clear_redo_stack() -> None:
    history = CommandHistory(
        store=DailyLogService(InMemoryLogRepository()), clear_redo_on_perform=True
    )
    history.perform(_add(APPLE))
    history.undo()

    history.perform(_add(BREAD))

    assert not history.can_redo
    assert not history.redo()


def test_describe_lists_newest_first(history: CommandHistory) -> None:
    history.perform(_add(APPLE, 2))
    history.perform(_add(BREAD, 0.5))

    assert history.describe() == [
        "Add 0.5 x bread for alice on 2024-03-01",
        "Add 2 x apple for alice on 2024-03-01",
    ]
