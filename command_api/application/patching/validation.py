from typing import Any, Iterable, Optional

from pydantic import ValidationError

from ...domain import CommandValidationException, DomainError, ErrorCode
from ..dtos import CommandUpdateDto

VALIDATION_TITLE = "One or more validation errors occurred."


def collect_error_details(errors: Iterable[dict[str, Any]]) -> dict[str, list[str]]:
    """Group pydantic error entries by field, dropping the leading ``body`` location."""
    details: dict[str, list[str]] = {}
    for error in errors:
        location = list(error.get("loc", ()))
        if location and location[0] == "body":
            location = location[1:]
        key = ".".join(str(part) for part in location) or "body"
        details.setdefault(key, []).append(error["msg"])
    return details


def validate_update(
    document: dict[str, Any],
    command_id: Optional[int] = None,
    operation: str = "PATCH"
) -> CommandUpdateDto:
    try:
        return CommandUpdateDto.model_validate(document)
    except ValidationError as e:
        raise CommandValidationException(DomainError(
            operation=operation,
            command_id=command_id,
            code=ErrorCode.VALIDATION_FAILED,
            message=VALIDATION_TITLE,
            details=collect_error_details(e.errors())
        )) from e
