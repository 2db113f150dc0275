from .commands import (
    CommandCreateDto,
    CommandUpdateDto,
    PatchOperation,
    HOW_TO_MAX_LENGTH,
    PLATFORM_MAX_LENGTH
)
from .responses import CommandReadDto, ValidationProblemResponse

__all__ = [
    "CommandCreateDto",
    "CommandUpdateDto",
    "PatchOperation",
    "HOW_TO_MAX_LENGTH",
    "PLATFORM_MAX_LENGTH",
    "CommandReadDto",
    "ValidationProblemResponse"
]
