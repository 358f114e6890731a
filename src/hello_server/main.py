import sys

import structlog

from .config import ServerConfig
from .exceptions import ServerStartupError
from .http_server.routes import RouterFactory, build_routes
from .http_server.server import HelloHTTPServer
from .utils.logging import configure_production_mode_logging


def main():
    configure_production_mode_logging()
    logger = structlog.get_logger(module=__name__)
    config = ServerConfig()
    logger.info("starting hello server", address=config.address)

    try:
        server = HelloHTTPServer(
            router_factory=RouterFactory(routes=build_routes(), logger=logger),
            logger=logger,
            config=config,
        )
    except ServerStartupError as e:
        logger.error("failed to start hello server", address=e.address, exc_info=e)
        sys.exit(1)

    try:
        server.start()
    except KeyboardInterrupt:
        logger.info("hello server interrupted")
    finally:
        server.stop()


if __name__ == "__main__":
    main()
