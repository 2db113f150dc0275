from typing import Optional

from sqlalchemy import Engine, String, Text, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

from ...application.dtos import HOW_TO_MAX_LENGTH, PLATFORM_MAX_LENGTH


class Base(DeclarativeBase):
    pass


class CommandRecord(Base):
    """ORM row for a stored command."""

    __tablename__ = "commands"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    how_to: Mapped[str] = mapped_column(String(HOW_TO_MAX_LENGTH), nullable=False)
    platform: Mapped[str] = mapped_column(String(PLATFORM_MAX_LENGTH), nullable=False)
    command_line: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo, pool_pre_ping=True)

    # request handlers run in a threadpool; in-memory sqlite needs a single shared connection
    kwargs = {"connect_args": {"check_same_thread": False}}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return create_engine(database_url, echo=echo, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def create_schema(engine: Engine) -> None:
    Base.metadata.create_all(engine)
