from .domain_exceptions import (
    DomainError,
    DomainException,
    CommandNotFoundException,
    CommandValidationException,
    PatchOperationException,
    StoreFailureException
)

__all__ = [
    "DomainError",
    "DomainException",
    "CommandNotFoundException",
    "CommandValidationException",
    "PatchOperationException",
    "StoreFailureException"
]
