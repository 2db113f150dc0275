from fastapi import APIRouter, Depends, Path, Request, Response, status
from typing import Annotated, Iterator

from ...application import (
    CommandHandler,
    CommandCreateDto,
    CommandReadDto,
    CommandUpdateDto,
    PatchOperation,
    ValidationProblemResponse
)
from ...domain import CommandRepository
from .auth import require_authorization

router = APIRouter(prefix="/api/commands", tags=["commands"])

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"description": "Command not found"}}
_INVALID = {status.HTTP_400_BAD_REQUEST: {"model": ValidationProblemResponse}}

# ids are stored as signed 64-bit integers
CommandId = Annotated[int, Path(ge=-(2**63), le=2**63 - 1)]


def get_repository(request: Request) -> Iterator[CommandRepository]:
    with request.app.state.repository_provider.open() as repository:
        yield repository


def get_command_handler(
    repository: CommandRepository = Depends(get_repository)
) -> CommandHandler:
    return CommandHandler(repository)


@router.get("", response_model=list[CommandReadDto])
def get_all_commands(
    handler: CommandHandler = Depends(get_command_handler)
) -> list[CommandReadDto]:
    return handler.list_commands()


@router.get("/{command_id}", response_model=CommandReadDto, name="get_command_by_id", responses=_NOT_FOUND)
def get_command_by_id(
    command_id: CommandId,
    handler: CommandHandler = Depends(get_command_handler)
) -> CommandReadDto:
    return handler.get_command(command_id)


@router.post(
    "",
    response_model=CommandReadDto,
    status_code=status.HTTP_201_CREATED,
    responses=_INVALID,
    dependencies=[Depends(require_authorization)]
)
def create_command(
    command: CommandCreateDto,
    request: Request,
    response: Response,
    handler: CommandHandler = Depends(get_command_handler)
) -> CommandReadDto:
    created = handler.create_command(command)
    response.headers["Location"] = str(request.url_for("get_command_by_id", command_id=created.id))
    return created


@router.put(
    "/{command_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_NOT_FOUND, **_INVALID},
    dependencies=[Depends(require_authorization)]
)
def update_command(
    command_id: CommandId,
    command: CommandUpdateDto,
    handler: CommandHandler = Depends(get_command_handler)
) -> Response:
    handler.update_command(command_id, command)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{command_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_NOT_FOUND, **_INVALID},
    dependencies=[Depends(require_authorization)]
)
def partial_command_update(
    command_id: CommandId,
    operations: list[PatchOperation],
    handler: CommandHandler = Depends(get_command_handler)
) -> Response:
    handler.patch_command(command_id, operations)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{command_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
    dependencies=[Depends(require_authorization)]
)
def delete_command(
    command_id: CommandId,
    handler: CommandHandler = Depends(get_command_handler)
) -> Response:
    handler.delete_command(command_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
