from dataclasses import dataclass
from typing import Optional


@dataclass
class Command:
    """
    A stored command-line snippet.

    ``id`` is None until the repository persists the command and assigns one.
    """

    id: Optional[int] = None
    how_to: Optional[str] = None
    platform: Optional[str] = None
    command_line: Optional[str] = None
