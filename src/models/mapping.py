"""
Field-by-field conversions between the stored Command entity and the
request/response models.
"""

from typing import Any, Dict, List

import jsonpatch

from src.models.command import Command
from src.models.requests import (
    CommandCreateRequest,
    CommandPatchRequest,
    CommandUpdateRequest,
    JsonPatchOperation,
)
from src.models.responses import CommandReadResponse


def command_from_create_request(request: CommandCreateRequest) -> Command:
    """Build a new, not yet persisted Command (id is left for the store)"""
    return Command(
        how_to=request.how_to,
        platform=request.platform,
        command_line=request.command_line,
    )


def command_to_read_response(command: Command) -> CommandReadResponse:
    if command.id is None:
        raise ValueError("Cannot build a read response for an unsaved command")
    return CommandReadResponse(
        id=command.id,
        how_to=command.how_to,
        platform=command.platform,
        command_line=command.command_line,
    )


def command_to_update_request(command: Command) -> CommandUpdateRequest:
    return CommandUpdateRequest(
        how_to=command.how_to,
        platform=command.platform,
        command_line=command.command_line,
    )


def apply_update_request(request: CommandUpdateRequest, command: Command) -> Command:
    """Overwrite every mutable field of command in place; id is untouched"""
    command.how_to = request.how_to
    command.platform = request.platform
    command.command_line = request.command_line
    return command


def apply_patch_request(
    patch: CommandPatchRequest, current: CommandUpdateRequest
) -> CommandUpdateRequest:
    """
    Merge the fields explicitly set on patch over current.

    The merged values are validated again, so a patch that produces an
    invalid update raises pydantic.ValidationError.
    """
    merged: Dict[str, Any] = current.model_dump()
    merged.update(patch.model_dump(exclude_unset=True))
    return CommandUpdateRequest.model_validate(merged)


def apply_json_patch(
    operations: List[JsonPatchOperation], current: CommandUpdateRequest
) -> CommandUpdateRequest:
    """
    Apply RFC 6902 operations to the camelCase form of current.

    A removed field becomes null. Raises jsonpatch.JsonPatchException or
    jsonpointer.JsonPointerException when an operation cannot be applied, and
    pydantic.ValidationError when the result is not a valid command (for
    example a patch that adds an id).
    """
    document = current.model_dump(by_alias=True)
    patched = jsonpatch.apply_patch(document, [op.to_operation() for op in operations])
    validated = CommandPatchRequest.model_validate(patched)
    return CommandUpdateRequest.model_validate(validated.model_dump())


def command_to_document(command: Command) -> Dict[str, Any]:
    """Serialize a Command for storage as a JSON document"""
    return {
        "id": command.id,
        "how_to": command.how_to,
        "platform": command.platform,
        "command_line": command.command_line,
    }


def command_from_document(document: Dict[str, Any]) -> Command:
    return Command(
        id=document["id"],
        how_to=document.get("how_to"),
        platform=document.get("platform"),
        command_line=document.get("command_line"),
    )
