"""Request logging and error mapping for the API."""

import time
import uuid
from collections.abc import Awaitable, Callable
from http import HTTPStatus

import httpx
from fastapi import Request, Response
from fastapi.responses import JSONResponse

from src.helpers.exceptions import ValidatorApiError
from src.helpers.logging import get_logger


logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


async def log_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Log every request once it is served, tagging it with a request id.

    The line is written even when the app raises; such requests are logged
    as 500 and their response is built by ``unexpected_error_handler``.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    request.state.request_id = request_id

    started = time.perf_counter()
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
    finally:
        logger.info(
            "served request method=%s path=%s status=%d lat=%.1fms reqId=%s",
            request.method,
            request.url.path,
            status_code,
            (time.perf_counter() - started) * 1000,
            request_id,
        )


def internal_error(request: Request) -> JSONResponse:
    """Bare 500 response carrying the request id when one was assigned."""
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    response = JSONResponse(status_code=status, content={"detail": status.phrase})
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers[REQUEST_ID_HEADER] = request_id
    return response


async def downstream_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Turn a downstream failure into a bare 500, keeping details in the log."""
    request_id = getattr(request.state, "request_id", "-")
    if isinstance(exc, httpx.HTTPError):
        # httpx messages embed the node URL and its API key; the client that
        # raised has already logged the sanitized URL
        logger.error(
            "%s %s failed reqId=%s: %s",
            request.method,
            request.url.path,
            request_id,
            type(exc).__name__,
        )
    else:
        logger.error(
            "%s %s failed reqId=%s: %r",
            request.method,
            request.url.path,
            request_id,
            exc,
            exc_info=exc,
        )
    return internal_error(request)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for exceptions no other handler claims."""
    logger.error(
        "%s %s crashed reqId=%s: %s",
        request.method,
        request.url.path,
        getattr(request.state, "request_id", "-"),
        type(exc).__name__,
        exc_info=exc,
    )
    return internal_error(request)


DOWNSTREAM_ERRORS: tuple[type[Exception], ...] = (ValidatorApiError, httpx.HTTPError)


__all__ = [
    "DOWNSTREAM_ERRORS",
    "REQUEST_ID_HEADER",
    "downstream_error_handler",
    "internal_error",
    "log_requests",
    "unexpected_error_handler",
]
