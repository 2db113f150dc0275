"""Interpreter for JSON Patch style operations against a command update document.

The document is the wire-shaped dict of a ``CommandUpdateDto``
(``{"howTo": ..., "platform": ..., "commandLine": ...}``). Paths address a
single top-level field and are matched case-insensitively, so ``/howto``
and ``/howTo`` target the same member. ``remove`` resets a field to
``None``; whether that is acceptable is decided later by validation.
"""
import logging
from typing import Any, Callable, Optional

from pydantic.alias_generators import to_camel

from ...domain import DomainError, ErrorCode, PatchOperationException, PatchOperationType
from ..dtos import CommandUpdateDto, PatchOperation

logger = logging.getLogger(__name__)

PATCH_OPERATION = "PATCH"

_FIELDS = {
    to_camel(name).lower(): to_camel(name)
    for name in CommandUpdateDto.model_fields
}


def apply_patch(
    document: dict[str, Any],
    operations: list[PatchOperation],
    command_id: Optional[int] = None
) -> dict[str, Any]:
    """Apply ``operations`` in order and return the patched copy of ``document``.

    Raises:
        PatchOperationException: an operation targets an unknown field, is
            missing its ``value``/``from`` member, or a ``test`` fails.
    """
    patched = dict(document)
    for index, operation in enumerate(operations):
        logger.debug(f"Applying patch operation {index} to command {command_id}: {operation.op.value} {operation.path}")
        _HANDLERS[operation.op](patched, operation, command_id)
    return patched


def _add(document: dict[str, Any], operation: PatchOperation, command_id: Optional[int]) -> None:
    target = _resolve(operation.path, command_id)
    document[target] = _required_value(operation, command_id)


def _remove(document: dict[str, Any], operation: PatchOperation, command_id: Optional[int]) -> None:
    target = _resolve(operation.path, command_id)
    document[target] = None


def _move(document: dict[str, Any], operation: PatchOperation, command_id: Optional[int]) -> None:
    source = _resolve(_required_from(operation, command_id), command_id)
    target = _resolve(operation.path, command_id)
    value = document.get(source)
    document[source] = None
    document[target] = value


def _copy(document: dict[str, Any], operation: PatchOperation, command_id: Optional[int]) -> None:
    source = _resolve(_required_from(operation, command_id), command_id)
    target = _resolve(operation.path, command_id)
    document[target] = document.get(source)


def _test(document: dict[str, Any], operation: PatchOperation, command_id: Optional[int]) -> None:
    target = _resolve(operation.path, command_id)
    expected = _required_value(operation, command_id)
    if document.get(target) != expected:
        raise _error(
            operation.path,
            f"The current value of '{target}' is not equal to the test value.",
            command_id
        )


_HANDLERS: dict[PatchOperationType, Callable[[dict[str, Any], PatchOperation, Optional[int]], None]] = {
    PatchOperationType.ADD: _add,
    PatchOperationType.REPLACE: _add,
    PatchOperationType.REMOVE: _remove,
    PatchOperationType.MOVE: _move,
    PatchOperationType.COPY: _copy,
    PatchOperationType.TEST: _test
}


def _resolve(path: str, command_id: Optional[int]) -> str:
    segments = path.split("/")
    if len(segments) != 2 or segments[0] != "":
        raise _error(path, f"The path '{path}' does not address a single field.", command_id)

    name = segments[1].replace("~1", "/").replace("~0", "~")
    field = _FIELDS.get(name.lower())
    if field is None:
        raise _error(path, f"The target location specified by path '{path}' was not found.", command_id)
    return field


def _required_value(operation: PatchOperation, command_id: Optional[int]) -> Any:
    if not operation.has_value:
        raise _error(
            operation.path,
            f"The '{operation.op.value}' operation requires a 'value' member.",
            command_id
        )
    return operation.value


def _required_from(operation: PatchOperation, command_id: Optional[int]) -> str:
    if not operation.from_:
        raise _error(
            operation.path,
            f"The '{operation.op.value}' operation requires a 'from' member.",
            command_id
        )
    return operation.from_


def _error(path: str, message: str, command_id: Optional[int]) -> PatchOperationException:
    return PatchOperationException(DomainError(
        operation=PATCH_OPERATION,
        command_id=command_id,
        code=ErrorCode.INVALID_PATCH,
        message=message,
        details={path: [message]}
    ))
