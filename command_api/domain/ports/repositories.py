from abc import ABC, abstractmethod
from typing import Optional

from ..entities import Command


class CommandRepository(ABC):
    """Persistence port for commands.

    Mutations are staged by ``create``, ``update`` and ``delete`` and only
    become durable on ``commit``. A missing id is reported by returning
    ``None`` from ``get_by_id``, never by raising.
    """

    @abstractmethod
    def list_all(self) -> list[Command]:
        pass

    @abstractmethod
    def get_by_id(self, command_id: int) -> Optional[Command]:
        pass

    @abstractmethod
    def create(self, command: Command) -> None:
        """Stage a new command. Its id is assigned by the store and written back on commit."""
        pass

    @abstractmethod
    def update(self, command: Command) -> None:
        pass

    @abstractmethod
    def delete(self, command: Command) -> None:
        pass

    @abstractmethod
    def commit(self) -> None:
        """Flush staged changes. Raises StoreFailureException if the store rejects them."""
        pass
