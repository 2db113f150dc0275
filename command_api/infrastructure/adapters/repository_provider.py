import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from ...config import Config
from ...domain import CommandRepository
from .database import build_engine, build_session_factory, create_schema
from .in_memory_repository import InMemoryCommandRepository
from .sqlalchemy_repository import SqlAlchemyCommandRepository

logger = logging.getLogger(__name__)


class RepositoryProvider:
    """Opens one repository per request for the configured backend.

    The ``memory`` backend opens a unit of work over one shared in-memory
    store; the ``sqlalchemy`` backend gets a fresh session each time.
    """

    def __init__(self, config: Config, repository: Optional[CommandRepository] = None):
        self._config = config
        self._repository = repository
        self._engine = None
        self._session_factory = None

    @property
    def backend(self) -> str:
        return "memory" if self._repository is not None else self._config.repository_backend

    def startup(self) -> None:
        if self.backend == "memory":
            if self._repository is None:
                self._repository = InMemoryCommandRepository()
            logger.info("Using in-memory command repository")
            return

        self._engine = build_engine(self._config.database_url, echo=self._config.sql_echo)
        create_schema(self._engine)
        self._session_factory = build_session_factory(self._engine)
        logger.info(f"Using SQL command repository at {self._engine.url.render_as_string(hide_password=True)}")

    def shutdown(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None

    @contextmanager
    def open(self) -> Iterator[CommandRepository]:
        if self.backend == "memory":
            if isinstance(self._repository, InMemoryCommandRepository):
                yield self._repository.begin()
            else:
                yield self._repository
            return

        if self._session_factory is None:
            raise RuntimeError("RepositoryProvider.startup() must run before opening a repository")

        session = self._session_factory()
        try:
            yield SqlAlchemyCommandRepository(session)
        finally:
            session.close()
