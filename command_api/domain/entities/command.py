from dataclasses import dataclass
from typing import Optional


@dataclass
class Command:
    how_to: str
    platform: str
    command_line: Optional[str] = None
    id: Optional[int] = None
