"""Application entry point.

Usage:
    NODE_ENDPOINT=https://node.example/key RELAYS_ENDPOINT="https://boost-relay.flashbots.net" \
        python -m src.main
"""

import sys

import uvicorn

from src.api.app import create_app
from src.helpers.config import ApiConfig
from src.helpers.logging import configure_logging, get_logger


def main() -> int:
    """Run the application until interrupted."""
    try:
        config = ApiConfig.from_env()
    except ValueError as e:
        get_logger(__name__).error("failed to validate config: %s", e)
        return 1

    configure_logging(config.log_level)
    logger = get_logger(__name__)

    app = create_app(config)
    logger.info("Server is listening on %s:%d", config.host, config.port)

    # uvicorn handles SIGINT and SIGTERM with a graceful shutdown
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
    logger.info("done: OK")
    return 0


if __name__ == "__main__":
    sys.exit(main())
