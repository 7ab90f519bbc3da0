from dataclasses import dataclass, field, replace
from typing import Dict, List

from src.models.command import Command


@dataclass
class ChangeTracker:
    """Pending creates, updates and deletes for one repository instance"""

    added: List[Command] = field(default_factory=list)
    modified: Dict[int, Command] = field(default_factory=dict)
    deleted: Dict[int, Command] = field(default_factory=dict)

    def add(self, command: Command) -> None:
        if command is None:
            raise ValueError("command must not be None")
        self.added.append(command)

    def modify(self, command: Command) -> None:
        if command is None:
            raise ValueError("command must not be None")
        if command.id is None:
            # Not persisted yet, the staged create already holds these values
            return
        self.modified[command.id] = replace(command)

    def delete(self, command: Command) -> None:
        if command is None:
            raise ValueError("command must not be None")
        if command.id is None:
            self.added = [c for c in self.added if c is not command]
            return
        self.modified.pop(command.id, None)
        self.deleted[command.id] = command

    def clear(self) -> None:
        self.added = []
        self.modified = {}
        self.deleted = {}
