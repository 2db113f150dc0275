import logging
import time
import uuid
from typing import Callable

from fastapi import Request

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def request_id_for(request: Request) -> str:
    """Return the id assigned by ``log_requests``, creating one if it has not run."""
    request_id = getattr(request.state, "request_id", None)
    if request_id is None:
        request_id = uuid.uuid4().hex[:12]
        request.state.request_id = request_id
    return request_id


async def log_requests(request: Request, call_next: Callable):
    request_id = request_id_for(request)
    started = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception:
        elapsed = time.perf_counter() - started
        logger.error(f"[{request_id}] {request.method} {request.url.path} failed after {elapsed:.3f}s")
        raise

    elapsed = time.perf_counter() - started
    response.headers[REQUEST_ID_HEADER] = request_id
    logger.info(f"[{request_id}] {request.method} {request.url.path} -> {response.status_code} ({elapsed:.3f}s)")
    return response
