from dataclasses import dataclass, field
from typing import Any, Optional

from ..enums import ErrorCode


@dataclass
class DomainError:
    operation: str
    command_id: Optional[int]
    code: ErrorCode
    message: str
    details: dict[str, list[str]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result = {
            "op": self.operation,
            "command_id": self.command_id,
            "code": self.code.value,
            "message": self.message
        }
        if self.details:
            result["errors"] = self.details
        return result


class DomainException(Exception):
    def __init__(self, error: DomainError):
        self.error = error
        super().__init__(error.message)


class CommandNotFoundException(DomainException):
    pass


class CommandValidationException(DomainException):
    pass


class PatchOperationException(DomainException):
    pass


class StoreFailureException(DomainException):
    pass
