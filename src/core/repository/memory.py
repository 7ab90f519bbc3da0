import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from src.core.repository.change_tracker import ChangeTracker
from src.core.repository.interface import CommandRepository
from src.models.command import Command

logger = logging.getLogger(__name__)


class InMemoryCommandRepository(CommandRepository):
    """
    Dict-backed CommandRepository.

    Used as the test double for the API layer and for throwaway local runs.
    Ids start at 1 and are never reused.
    """

    def __init__(self, commands: Optional[Iterable[Command]] = None):
        """
        Initialize the repository

        Args:
            commands: Optional seed data. Commands without an id get one.
        """
        self._commands: Dict[int, Command] = {}
        self._next_id = 1
        self._changes = ChangeTracker()
        for command in commands or []:
            self._insert(replace(command))

    def _insert(self, command: Command) -> None:
        if command.id is None:
            command.id = self._next_id
        self._commands[command.id] = command
        self._next_id = max(self._next_id, command.id + 1)

    async def get_all_commands(self) -> List[Command]:
        return [replace(self._commands[key]) for key in sorted(self._commands)]

    async def get_command_by_id(self, command_id: int) -> Optional[Command]:
        command = self._commands.get(command_id)
        return replace(command) if command is not None else None

    async def count_commands(self) -> int:
        return len(self._commands)

    def create_command(self, command: Command) -> None:
        self._changes.add(command)

    def update_command(self, command: Command) -> None:
        self._changes.modify(command)

    def delete_command(self, command: Command) -> None:
        self._changes.delete(command)

    async def save_changes(self) -> bool:
        for command in self._changes.added:
            # Ids always come from the store
            stored = replace(command, id=None)
            self._insert(stored)
            # Write the assigned id back onto the caller's entity
            command.id = stored.id
            logger.debug(f"Created command {stored.id}")

        for command_id, command in self._changes.modified.items():
            if command_id in self._commands:
                self._commands[command_id] = replace(command)

        for command_id in self._changes.deleted:
            self._commands.pop(command_id, None)

        self._changes.clear()
        return True

    def __len__(self) -> int:
        return len(self._commands)
