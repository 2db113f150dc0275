from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from fastapi import FastAPI

from command_api.config import Config
from command_api.domain import CommandRepository
from command_api.infrastructure.adapters import RepositoryProvider
from command_api.infrastructure.api import log_requests, register_exception_handlers, router
from command_api.logging_config import configure_logging


def create_app(
    config: Optional[Config] = None,
    repository: Optional[CommandRepository] = None
) -> FastAPI:
    config = config or Config.from_env()
    configure_logging(config.log_level)
    provider = RepositoryProvider(config, repository)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[Any, Any]:
        provider.startup()
        yield
        provider.shutdown()

    app = FastAPI(
        lifespan=lifespan,
        title="Command API",
        description="API for storing and looking up command line snippets by platform",
        version="1.0.0"
    )
    app.state.config = config
    app.state.repository_provider = provider

    app.middleware("http")(log_requests)
    register_exception_handlers(app)
    app.include_router(router)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
