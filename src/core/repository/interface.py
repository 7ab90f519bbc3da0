from abc import ABC, abstractmethod
from typing import List, Optional

from src.models.command import Command


class CommandRepository(ABC):
    """
    Abstract data access for commands.

    Mutations are staged by create_command, update_command and
    delete_command, and only become visible once save_changes() runs.
    """

    @abstractmethod
    async def get_all_commands(self) -> List[Command]:
        """
        Get every stored command

        Returns:
            Commands ordered by id, possibly empty
        """
        pass

    @abstractmethod
    async def get_command_by_id(self, command_id: int) -> Optional[Command]:
        """
        Look up a single command

        Args:
            command_id: Identifier assigned by the store

        Returns:
            A detached copy of the command, or None if no command has that id
        """
        pass

    @abstractmethod
    async def count_commands(self) -> int:
        """Number of stored commands, without loading them"""
        pass

    @abstractmethod
    def create_command(self, command: Command) -> None:
        """
        Stage a new command. Its id is assigned by save_changes().

        Raises:
            ValueError: If command is None
        """
        pass

    @abstractmethod
    def update_command(self, command: Command) -> None:
        """Stage the current field values of an existing command"""
        pass

    @abstractmethod
    def delete_command(self, command: Command) -> None:
        """
        Stage removal of an existing command

        Raises:
            ValueError: If command is None
        """
        pass

    @abstractmethod
    async def save_changes(self) -> bool:
        """
        Persist all staged changes

        Returns:
            True once the changes are stored
        """
        pass
