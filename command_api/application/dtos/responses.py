from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional


class CommandReadDto(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    how_to: str
    platform: str
    command_line: Optional[str] = None


class ValidationProblemResponse(BaseModel):
    title: str
    status: int
    errors: dict[str, list[str]]
