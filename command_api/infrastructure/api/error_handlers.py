import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ...application.patching import VALIDATION_TITLE, collect_error_details
from ...domain import (
    CommandNotFoundException,
    CommandValidationException,
    DomainException,
    PatchOperationException,
    StoreFailureException
)
from .middleware import REQUEST_ID_HEADER, request_id_for

logger = logging.getLogger(__name__)


def validation_problem(errors: dict[str, list[str]], title: str = VALIDATION_TITLE) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "title": title,
            "status": status.HTTP_400_BAD_REQUEST,
            "errors": errors
        }
    )


async def not_found_handler(request: Request, exc: CommandNotFoundException) -> Response:
    return Response(status_code=status.HTTP_404_NOT_FOUND)


async def invalid_command_handler(request: Request, exc: DomainException) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} rejected: {exc.error.to_dict()}")
    return validation_problem(exc.error.details, exc.error.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = collect_error_details(exc.errors())
    logger.info(f"{request.method} {request.url.path} rejected: {errors}")
    return validation_problem(errors)


async def store_failure_handler(request: Request, exc: StoreFailureException) -> JSONResponse:
    logger.error(f"[{request_id_for(request)}] Store failure in {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": exc.error.message}
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = request_id_for(request)
    logger.error(f"[{request_id}] Unhandled {type(exc).__name__} in {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
        headers={REQUEST_ID_HEADER: request_id}
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CommandNotFoundException, not_found_handler)
    app.add_exception_handler(CommandValidationException, invalid_command_handler)
    app.add_exception_handler(PatchOperationException, invalid_command_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StoreFailureException, store_failure_handler)
    app.add_exception_handler(Exception, global_exception_handler)
