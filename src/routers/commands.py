import logging
from typing import List, Union

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status
from jsonpatch import JsonPatchException
from jsonpointer import JsonPointerException
from pydantic import ValidationError

from src.config.constants import COMMANDS_ROUTE_PREFIX
from src.config.storage import create_command_repository, get_command_storage
from src.core.repository.interface import CommandRepository
from src.core.storage.interface import StorageInterface
from src.models.mapping import (
    apply_json_patch,
    apply_patch_request,
    apply_update_request,
    command_from_create_request,
    command_to_read_response,
    command_to_update_request,
)
from src.models.requests import (
    CommandCreateRequest,
    CommandPatchRequest,
    CommandUpdateRequest,
    JsonPatchOperation,
)
from src.models.responses import CommandReadResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=COMMANDS_ROUTE_PREFIX,
    tags=["Commands"],
    responses={404: {"description": "Command not found"}},
)


# Dependency functions
def get_command_repository(
    storage: StorageInterface = Depends(get_command_storage),
) -> CommandRepository:
    """Get the command repository configured by COMMAND_REPOSITORY_TYPE"""
    return create_command_repository(storage)


def _not_found(command_id: int) -> HTTPException:
    logger.info(f"Command {command_id} not found")
    return HTTPException(status_code=404, detail="Command not found")


@router.get("", response_model=List[CommandReadResponse])
async def get_all_commands(
    repository: CommandRepository = Depends(get_command_repository),
) -> List[CommandReadResponse]:
    """List every stored command"""
    commands = await repository.get_all_commands()
    return [command_to_read_response(command) for command in commands]


@router.get(
    "/{command_id}",
    name="get_command_by_id",
    response_model=CommandReadResponse,
)
async def get_command_by_id(
    command_id: int,
    repository: CommandRepository = Depends(get_command_repository),
) -> CommandReadResponse:
    command = await repository.get_command_by_id(command_id)
    if command is None:
        raise _not_found(command_id)
    return command_to_read_response(command)


@router.post(
    "",
    response_model=CommandReadResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_command(
    body: CommandCreateRequest,
    request: Request,
    response: Response,
    repository: CommandRepository = Depends(get_command_repository),
) -> CommandReadResponse:
    """
    Create a command. The id is assigned by the store and the Location
    header points at the new resource.
    """
    command = command_from_create_request(body)
    repository.create_command(command)
    await repository.save_changes()

    logger.info(f"Created command {command.id}")
    response.headers["Location"] = str(
        request.url_for("get_command_by_id", command_id=command.id)
    )
    return command_to_read_response(command)


@router.put(
    "/{command_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def update_command(
    command_id: int,
    body: CommandUpdateRequest,
    repository: CommandRepository = Depends(get_command_repository),
) -> Response:
    """Replace every mutable field of a command"""
    command = await repository.get_command_by_id(command_id)
    if command is None:
        raise _not_found(command_id)

    apply_update_request(body, command)
    repository.update_command(command)
    await repository.save_changes()

    logger.info(f"Updated command {command_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{command_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def partial_command_update(
    command_id: int,
    patch: Union[List[JsonPatchOperation], CommandPatchRequest] = Body(
        ...,
        description="Either an RFC 6902 operation list or a sparse object of fields to change",
    ),
    repository: CommandRepository = Depends(get_command_repository),
) -> Response:
    """
    Partially update a command. Accepts a JSON Patch operation list
    (application/json-patch+json) or a merge-style object with only the
    fields to change.
    """
    command = await repository.get_command_by_id(command_id)
    if command is None:
        raise _not_found(command_id)

    current = command_to_update_request(command)
    try:
        if isinstance(patch, list):
            patched = apply_json_patch(patch, current)
        else:
            patched = apply_patch_request(patch, current)
    except ValidationError as e:
        logger.warning(f"Rejected patch for command {command_id}: {e}")
        raise HTTPException(status_code=422, detail=e.errors(include_url=False))
    except (JsonPatchException, JsonPointerException) as e:
        logger.warning(f"Could not apply patch to command {command_id}: {e}")
        raise HTTPException(status_code=422, detail=f"Invalid patch: {e}")

    apply_update_request(patched, command)
    repository.update_command(command)
    await repository.save_changes()

    logger.info(f"Patched command {command_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{command_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_command(
    command_id: int,
    repository: CommandRepository = Depends(get_command_repository),
) -> Response:
    command = await repository.get_command_by_id(command_id)
    if command is None:
        raise _not_found(command_id)

    repository.delete_command(command)
    await repository.save_changes()

    logger.info(f"Deleted command {command_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
