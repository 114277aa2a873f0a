"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from slowapi.errors import RateLimitExceeded

from src.api.dependencies import Services, set_services
from src.api.limits import limiter, rate_limit_exceeded_handler
from src.api.middleware import (
    DOWNSTREAM_ERRORS,
    downstream_error_handler,
    log_requests,
    unexpected_error_handler,
)
from src.api.routes import router
from src.data.beacon.client import BeaconClient
from src.data.blocks.client import NodeClient
from src.data.relays.aggregator import RelayAggregator
from src.data.validators.directory import ValidatorDirectory
from src.helpers.config import ApiConfig
from src.helpers.constants import BEACON_TIMEOUT, DEFAULT_TIMEOUT, RELAY_TIMEOUT
from src.helpers.http import create_http_client
from src.helpers.logging import get_logger
from src.helpers.parsers import sanitize_url
from src.helpers.rpc import RPCClient
from src.rewards.resolver import RewardResolver

logger = get_logger(__name__)


def create_app(config: ApiConfig | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Application configuration. If None, loads from environment.

    Returns:
        Configured FastAPI application
    """
    if config is None:
        config = ApiConfig.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create shared clients on startup and close them on shutdown."""
        logger.info("eth validator api server is starting")
        logger.info("Using node: %s", sanitize_url(config.node_endpoint))
        logger.info("Using %d relay(s)", len(config.relay_endpoints))

        beacon_http = create_http_client(timeout=BEACON_TIMEOUT)
        rpc_http = create_http_client(timeout=DEFAULT_TIMEOUT)
        relay_http = create_http_client(timeout=RELAY_TIMEOUT)

        try:
            beacon = BeaconClient(beacon_http, config.node_endpoint)
            node = NodeClient(rpc_http, RPCClient(config.rpc_endpoint))
            services = Services(
                beacon=beacon,
                relays=RelayAggregator.from_endpoints(relay_http, config.relay_endpoints),
                resolver=RewardResolver(node),
                directory=ValidatorDirectory(beacon),
            )

            if config.preload_validators:
                logger.info("loading validator index map, this can take a while")
                await services.directory.rebuild()
                logger.info("validator index map loaded")

            set_services(services)
            yield
        finally:
            logger.info("Shutting down...")
            set_services(None)
            await beacon_http.aclose()
            await rpc_http.aclose()
            await relay_http.aclose()

    app = FastAPI(
        title="Eth Validator API",
        description="Proposer block rewards and sync committee duties per slot",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.middleware("http")(log_requests)
    for error in DOWNSTREAM_ERRORS:
        app.add_exception_handler(error, downstream_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Include API routes
    app.include_router(router)

    # Health check endpoint
    @app.get("/healthz", response_class=PlainTextResponse)
    async def health_check() -> str:
        return "OK"

    return app
