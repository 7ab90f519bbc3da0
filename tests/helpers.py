from typing import List

from src.models.command import Command


def make_commands(num: int) -> List[Command]:
    """Build num sample commands with ids 1..num"""
    commands = []
    for i in range(1, num + 1):
        commands.append(
            Command(
                id=i,
                how_to=f"How to generate migration {i}",
                platform=".Net Core EF",
                command_line=f"dotnet ef migrations add Migration{i}",
            )
        )
    return commands
