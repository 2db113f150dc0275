from .entities import Command
from .enums import ErrorCode, PatchOperationType
from .exceptions import (
    DomainError,
    DomainException,
    CommandNotFoundException,
    CommandValidationException,
    PatchOperationException,
    StoreFailureException
)
from .ports import CommandRepository

__all__ = [
    "Command",
    "ErrorCode",
    "PatchOperationType",
    "DomainError",
    "DomainException",
    "CommandNotFoundException",
    "CommandValidationException",
    "PatchOperationException",
    "StoreFailureException",
    "CommandRepository"
]
