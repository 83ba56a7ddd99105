"""Entry point for the Rollbook API server."""

import structlog

from rollbook.app import App
from rollbook.config import Config
from rollbook.logging import setup_logging
from rollbook.web.runner import run_server

logger = structlog.get_logger(__name__)


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    logger.info("rollbook_starting", host=config.host, port=config.port, debug=config.debug)
    run_server(App(config), config)


if __name__ == "__main__":
    main()
