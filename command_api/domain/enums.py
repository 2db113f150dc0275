from enum import Enum


class ErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    INVALID_PATCH = "INVALID_PATCH"
    STORE_FAILURE = "STORE_FAILURE"


class PatchOperationType(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    COPY = "copy"
    TEST = "test"

    @classmethod
    def _missing_(cls, value):
        # op names are matched case-insensitively
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return None
