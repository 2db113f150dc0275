from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Optional

from ...domain import PatchOperationType

HOW_TO_MAX_LENGTH = 250
PLATFORM_MAX_LENGTH = 100


class CommandWriteDto(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid"
    )

    how_to: str = Field(min_length=1, max_length=HOW_TO_MAX_LENGTH)
    platform: str = Field(min_length=1, max_length=PLATFORM_MAX_LENGTH)
    command_line: Optional[str] = None

    @field_validator("how_to", "platform")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class CommandCreateDto(CommandWriteDto):
    pass


class CommandUpdateDto(CommandWriteDto):
    pass


class PatchOperation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    op: PatchOperationType
    path: str
    value: Any = None
    from_: Optional[str] = Field(default=None, alias="from")

    @property
    def has_value(self) -> bool:
        return "value" in self.model_fields_set
