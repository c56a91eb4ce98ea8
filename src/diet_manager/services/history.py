"""Undo/redo history of log commands."""

import logging
from dataclasses import dataclass, field

from diet_manager.domain.history import EntryStore, LogCommand

_logger = logging.getLogger(__name__)


@dataclass
class CommandHistory:
    """Two unbounded stacks of reversible log commands.

    By default a new command leaves the redo stack intact, so earlier undone
    commands stay redoable. Set ``clear_redo_on_perform`` for the conventional
    behaviour where a new command discards them.
    """

    store: EntryStore
    clear_redo_on_perform: bool = False
    undo_stack: list[LogCommand] = field(default_factory=list, init=False)
    redo_stack: list[LogCommand] = field(default_factory=list, init=False)

    def perform(self, command: LogCommand) -> None:
        """Apply a command and record it for undo."""
        command.apply(self.store)
        self.undo_stack.append(command)
        if self.clear_redo_on_perform:
            self.redo_stack.clear()
        _logger.info("Performed: %s", command.describe())

    def undo(self) -> bool:
        """Revert the latest command; False when there is nothing to undo."""
        if not self.undo_stack:
            return False
        command = self.undo_stack.pop()
        command.revert(self.store)
        self.redo_stack.append(command)
        _logger.info("Undone: %s", command.describe())
        return True

    def redo(self) -> bool:
        """Re-apply the latest undone command; False when there is none."""
        if not self.redo_stack:
            return False
        command = self.redo_stack.pop()
        command.apply(self.store)
        self.undo_stack.append(command)
        _logger.info("Redone: %s", command.describe())
        return True

    @property
    def can_undo(self) -> bool:
        """True when undo would do something."""
        return bool(self.undo_stack)

    @property
    def can_redo(self) -> bool:
        """True when redo would do something."""
        return bool(self.redo_stack)

    def describe(self) -> list[str]:
        """Return undoable commands, newest first."""
        return [command.describe() for command in reversed(self.undo_stack)]
