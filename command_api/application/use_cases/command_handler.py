import logging

from ...domain import (
    Command,
    CommandRepository,
    CommandNotFoundException,
    DomainError,
    ErrorCode
)
from ..dtos import CommandCreateDto, CommandReadDto, CommandUpdateDto, PatchOperation
from ..mappers import apply_update_dto, from_create_dto, to_read_dto, to_update_dto
from ..patching import apply_patch, validate_update

logger = logging.getLogger(__name__)


class CommandHandler:
    """Maps each command resource operation onto repository calls.

    Mutating operations stage exactly one change and commit it. Missing ids
    raise ``CommandNotFoundException`` before anything is staged.
    """

    def __init__(self, repository: CommandRepository):
        self._repository = repository

    def list_commands(self) -> list[CommandReadDto]:
        commands = self._repository.list_all()
        logger.debug(f"Listing {len(commands)} commands")
        return [to_read_dto(command) for command in commands]

    def get_command(self, command_id: int) -> CommandReadDto:
        command = self._get_command(command_id, "GET")
        return to_read_dto(command)

    def create_command(self, dto: CommandCreateDto) -> CommandReadDto:
        command = from_create_dto(dto)
        self._repository.create(command)
        self._repository.commit()

        logger.info(f"Created command {command.id} for platform '{command.platform}'")
        return to_read_dto(command)

    def update_command(self, command_id: int, dto: CommandUpdateDto) -> None:
        command = self._get_command(command_id, "UPDATE")
        apply_update_dto(dto, command)

        self._repository.update(command)
        self._repository.commit()
        logger.info(f"Replaced command {command_id}")

    def patch_command(self, command_id: int, operations: list[PatchOperation]) -> None:
        command = self._get_command(command_id, "PATCH")

        document = to_update_dto(command).model_dump(by_alias=True)
        patched = apply_patch(document, operations, command_id)
        dto = validate_update(patched, command_id)

        apply_update_dto(dto, command)
        self._repository.update(command)
        self._repository.commit()
        logger.info(f"Patched command {command_id} with {len(operations)} operation(s)")

    def delete_command(self, command_id: int) -> None:
        command = self._get_command(command_id, "DELETE")

        self._repository.delete(command)
        self._repository.commit()
        logger.info(f"Deleted command {command_id}")

    def _get_command(self, command_id: int, operation: str) -> Command:
        command = self._repository.get_by_id(command_id)
        if command is None:
            logger.info(f"{operation}: command {command_id} not found")
            raise CommandNotFoundException(DomainError(
                operation=operation,
                command_id=command_id,
                code=ErrorCode.NOT_FOUND,
                message=f"Command not found: {command_id}"
            ))
        return command
