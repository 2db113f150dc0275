from .in_memory_repository import InMemoryCommandRepository
from .sqlalchemy_repository import SqlAlchemyCommandRepository
from .database import Base, CommandRecord, build_engine, build_session_factory, create_schema
from .repository_provider import RepositoryProvider

__all__ = [
    "InMemoryCommandRepository",
    "SqlAlchemyCommandRepository",
    "Base",
    "CommandRecord",
    "build_engine",
    "build_session_factory",
    "create_schema",
    "RepositoryProvider"
]
