from .use_cases import CommandHandler
from .dtos import (
    CommandCreateDto,
    CommandReadDto,
    CommandUpdateDto,
    PatchOperation,
    ValidationProblemResponse
)

__all__ = [
    "CommandHandler",
    "CommandCreateDto",
    "CommandReadDto",
    "CommandUpdateDto",
    "PatchOperation",
    "ValidationProblemResponse"
]
