import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...domain import (
    Command,
    CommandRepository,
    DomainError,
    ErrorCode,
    StoreFailureException
)
from .database import CommandRecord

logger = logging.getLogger(__name__)


class SqlAlchemyCommandRepository(CommandRepository):
    """Command store backed by a SQLAlchemy session.

    Entities handed out are detached domain objects; writes are translated
    onto ``CommandRecord`` rows and flushed by ``commit``.
    """

    def __init__(self, session: Session):
        self._session = session
        self._created: list[tuple[Command, CommandRecord]] = []

    def list_all(self) -> list[Command]:
        records = self._session.scalars(select(CommandRecord)).all()
        return [self._to_entity(record) for record in records]

    def get_by_id(self, command_id: int) -> Optional[Command]:
        record = self._session.get(CommandRecord, command_id)
        return self._to_entity(record) if record is not None else None

    def create(self, command: Command) -> None:
        record = CommandRecord(
            how_to=command.how_to,
            platform=command.platform,
            command_line=command.command_line
        )
        self._session.add(record)
        self._created.append((command, record))

    def update(self, command: Command) -> None:
        record = self._session.get(CommandRecord, command.id)
        if record is None:
            return
        record.how_to = command.how_to
        record.platform = command.platform
        record.command_line = command.command_line

    def delete(self, command: Command) -> None:
        record = self._session.get(CommandRecord, command.id)
        if record is not None:
            self._session.delete(record)

    def commit(self) -> None:
        created, self._created = self._created, []
        try:
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error(f"Commit failed, staged changes rolled back: {e}")
            raise StoreFailureException(DomainError(
                operation="COMMIT",
                command_id=None,
                code=ErrorCode.STORE_FAILURE,
                message="The command store could not save changes."
            )) from e

        for command, record in created:
            command.id = record.id

    @staticmethod
    def _to_entity(record: CommandRecord) -> Command:
        return Command(
            id=record.id,
            how_to=record.how_to,
            platform=record.platform,
            command_line=record.command_line
        )
