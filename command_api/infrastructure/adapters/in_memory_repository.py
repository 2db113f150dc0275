import threading
from dataclasses import replace
from typing import Callable, Iterable, Optional

from ...domain import Command, CommandRepository


class _InMemoryStore:
    def __init__(self, commands: Iterable[Command]):
        self.lock = threading.Lock()
        self.commands: dict[int, Command] = {c.id: replace(c) for c in commands}
        self.next_id = max(self.commands, default=0) + 1


class InMemoryCommandRepository(CommandRepository):
    """Dict-backed repository used by tests and the ``memory`` backend.

    Callers only ever receive copies, and staged changes are applied on
    ``commit``. Each instance stages its own changes; ``begin`` opens another
    unit of work over the same store, so one request's commit never applies
    another request's staged work.
    """

    def __init__(
        self,
        commands: Optional[Iterable[Command]] = None,
        store: Optional[_InMemoryStore] = None
    ):
        self._store = store if store is not None else _InMemoryStore(commands or [])
        self._pending: list[Callable[[], None]] = []

    def begin(self) -> 'InMemoryCommandRepository':
        return type(self)(store=self._store)

    def list_all(self) -> list[Command]:
        with self._store.lock:
            return [replace(command) for command in self._store.commands.values()]

    def get_by_id(self, command_id: int) -> Optional[Command]:
        with self._store.lock:
            command = self._store.commands.get(command_id)
            return replace(command) if command is not None else None

    def create(self, command: Command) -> None:
        def apply() -> None:
            command.id = self._store.next_id
            self._store.next_id += 1
            self._store.commands[command.id] = replace(command)

        self._pending.append(apply)

    def update(self, command: Command) -> None:
        snapshot = replace(command)

        def apply() -> None:
            self._store.commands[snapshot.id] = snapshot

        self._pending.append(apply)

    def delete(self, command: Command) -> None:
        command_id = command.id

        def apply() -> None:
            self._store.commands.pop(command_id, None)

        self._pending.append(apply)

    def commit(self) -> None:
        pending, self._pending = self._pending, []
        with self._store.lock:
            for apply in pending:
                apply()
