import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


REPOSITORY_BACKENDS = ("sqlalchemy", "memory")


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from environment variables.

    ``api_tokens`` are the bearer tokens accepted for write operations. When
    it is empty every write request is rejected.
    """

    repository_backend: str = "sqlalchemy"
    database_url: str = "sqlite:///./commands.db"
    api_tokens: frozenset[str] = field(default_factory=frozenset)
    log_level: str = "INFO"
    sql_echo: bool = False

    @classmethod
    def from_env(cls) -> 'Config':
        load_dotenv()
        tokens = os.getenv("COMMAND_API_TOKENS", "")
        config = cls(
            repository_backend=os.getenv("COMMAND_API_REPOSITORY", "sqlalchemy").strip().lower(),
            database_url=os.getenv("COMMAND_API_DATABASE_URL", "sqlite:///./commands.db"),
            api_tokens=frozenset(t.strip() for t in tokens.split(",") if t.strip()),
            log_level=os.getenv("COMMAND_API_LOG_LEVEL", "INFO").upper(),
            sql_echo=os.getenv("COMMAND_API_SQL_ECHO", "false").lower() == "true"
        )
        config.validate()
        return config

    def validate(self) -> None:
        if self.repository_backend not in REPOSITORY_BACKENDS:
            raise ValueError(
                f"COMMAND_API_REPOSITORY must be one of {', '.join(REPOSITORY_BACKENDS)}, "
                f"got '{self.repository_backend}'"
            )
        if self.repository_backend == "sqlalchemy" and not self.database_url:
            raise ValueError("COMMAND_API_DATABASE_URL environment variable is required")
