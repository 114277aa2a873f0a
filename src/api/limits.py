"""Per-client rate limiting for the validator routes."""

from http import HTTPStatus

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from src.helpers.constants import VALIDATOR_RATE_LIMIT
from src.helpers.logging import get_logger


logger = get_logger(__name__)

REAL_IP_HEADERS = ("True-Client-IP", "X-Real-IP")
FORWARDED_FOR_HEADER = "X-Forwarded-For"


def client_ip(request: Request) -> str:
    """Address of the calling client, as reported by a fronting proxy.

    Checks True-Client-IP, then X-Real-IP, then the first X-Forwarded-For
    hop, and falls back to the socket peer.
    """
    for header in REAL_IP_HEADERS:
        value = request.headers.get(header, "").strip()
        if value:
            return value

    first_hop = request.headers.get(FORWARDED_FOR_HEADER, "").split(",")[0].strip()
    if first_hop:
        return first_hop

    return get_remote_address(request)


limiter = Limiter(key_func=client_ip)

# One budget per client across every route under /eth/validator
validator_rate_limit = limiter.shared_limit(
    VALIDATOR_RATE_LIMIT, scope="eth-validator"
)


async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Answer a throttled request with a bare 429."""
    logger.warning(
        "rate limited ip=%s path=%s limit=%s",
        client_ip(request),
        request.url.path,
        exc.detail,
    )
    status = HTTPStatus.TOO_MANY_REQUESTS
    return JSONResponse(status_code=status, content={"detail": status.phrase})


__all__ = [
    "client_ip",
    "limiter",
    "rate_limit_exceeded_handler",
    "validator_rate_limit",
]
