import asyncio
import logging
import weakref
from typing import List, Optional

from src.config.constants import COMMANDS_STORAGE_PREFIX
from src.core.repository.change_tracker import ChangeTracker
from src.core.repository.interface import CommandRepository
from src.core.storage.interface import StorageInterface
from src.models.command import Command
from src.models.mapping import command_from_document, command_to_document

logger = logging.getLogger(__name__)

# One write lock per storage instance, shared by every repository over it
_storage_locks: "weakref.WeakKeyDictionary[StorageInterface, asyncio.Lock]" = (
    weakref.WeakKeyDictionary()
)


def _write_lock(storage: StorageInterface) -> asyncio.Lock:
    lock = _storage_locks.get(storage)
    if lock is None:
        lock = asyncio.Lock()
        _storage_locks[storage] = lock
    return lock


class StorageCommandRepository(CommandRepository):
    """CommandRepository that keeps one JSON document per command on a StorageInterface"""

    def __init__(
        self, storage: StorageInterface, prefix: str = COMMANDS_STORAGE_PREFIX
    ):
        """
        Initialize the repository

        Args:
            storage: Storage interface (memory or S3-compatible) holding the documents
            prefix: Path prefix for command documents
        """
        self.storage = storage
        self.prefix = prefix.rstrip("/")
        self._changes = ChangeTracker()

    def _document_path(self, command_id: int) -> str:
        return f"{self.prefix}/{command_id}.json"

    def _id_from_path(self, path: str) -> Optional[int]:
        """Extract the command id from a path like commands/12.json"""
        filename = path.rsplit("/", 1)[-1]
        if not filename.endswith(".json"):
            return None
        try:
            return int(filename[: -len(".json")])
        except ValueError:
            return None

    async def _stored_ids(self) -> List[int]:
        paths = await self.storage.list_files(self.prefix)
        ids = [self._id_from_path(path) for path in paths]
        return sorted(command_id for command_id in ids if command_id is not None)

    async def _exists(self, command_id: int) -> bool:
        try:
            await self.storage.get_bytes(self._document_path(command_id))
        except FileNotFoundError:
            return False
        return True

    async def get_all_commands(self) -> List[Command]:
        commands = []
        for command_id in await self._stored_ids():
            command = await self.get_command_by_id(command_id)
            # Deleted between listing and reading
            if command is not None:
                commands.append(command)
        return commands

    async def get_command_by_id(self, command_id: int) -> Optional[Command]:
        try:
            document = await self.storage.get_json(self._document_path(command_id))
        except FileNotFoundError:
            logger.debug(f"No stored document for command {command_id}")
            return None
        return command_from_document(document)

    async def count_commands(self) -> int:
        return len(await self._stored_ids())

    def create_command(self, command: Command) -> None:
        self._changes.add(command)

    def update_command(self, command: Command) -> None:
        self._changes.modify(command)

    def delete_command(self, command: Command) -> None:
        self._changes.delete(command)

    async def save_changes(self) -> bool:
        async with _write_lock(self.storage):
            if self._changes.added:
                stored_ids = await self._stored_ids()
                next_id = (stored_ids[-1] + 1) if stored_ids else 1
                for command in self._changes.added:
                    command.id = next_id
                    next_id += 1
                    url = await self.storage.save_json(
                        command_to_document(command), self._document_path(command.id)
                    )
                    logger.debug(f"Created command {command.id} at {url}")

            for command_id, command in self._changes.modified.items():
                if not await self._exists(command_id):
                    logger.warning(f"Skipping update of command {command_id}: it was deleted")
                    continue
                await self.storage.save_json(
                    command_to_document(command), self._document_path(command_id)
                )

            for command_id in self._changes.deleted:
                try:
                    await self.storage.delete(self._document_path(command_id))
                except FileNotFoundError:
                    logger.warning(f"Command {command_id} was already removed from storage")

        self._changes.clear()
        return True
