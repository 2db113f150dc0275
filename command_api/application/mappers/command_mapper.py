from ...domain import Command
from ..dtos import CommandCreateDto, CommandReadDto, CommandUpdateDto


def to_read_dto(command: Command) -> CommandReadDto:
    return CommandReadDto(
        id=command.id,
        how_to=command.how_to,
        platform=command.platform,
        command_line=command.command_line
    )


def from_create_dto(dto: CommandCreateDto) -> Command:
    return Command(
        how_to=dto.how_to,
        platform=dto.platform,
        command_line=dto.command_line
    )


def apply_update_dto(dto: CommandUpdateDto, command: Command) -> Command:
    """Overwrite every mutable field of ``command`` in place. The id is left alone."""
    command.how_to = dto.how_to
    command.platform = dto.platform
    command.command_line = dto.command_line
    return command


def to_update_dto(command: Command) -> CommandUpdateDto:
    # model_construct skips validation: a stored row may predate the current limits
    return CommandUpdateDto.model_construct(
        how_to=command.how_to,
        platform=command.platform,
        command_line=command.command_line
    )
