#!/usr/bin/env python3
"""Entry point: serve powermetrics, vm_stat and macmon samples over HTTP"""
import platform
import sys
import uvicorn
from config import Config
from app.server import MetricsServer
from logging_config import setup_structured_logging, get_logger, log_server_startup, log_error


def create_server(config: Config) -> MetricsServer:
    """Build the HTTP server and its registry from settings"""
    logger = get_logger(__name__)

    if platform.system() != "Darwin":
        # The tools are macOS-only; every source will fail, but page size still reports
        logger.warning("Not running on macOS", system=platform.system(), event_type="platform_check")

    return MetricsServer(config)


def main():
    """Load settings, configure logging and run uvicorn until interrupted"""
    logger = get_logger(__name__)
    try:
        config = Config()
        setup_structured_logging(config)
        log_server_startup(logger, config)

        server = create_server(config)
        uvicorn.run(
            server.get_app(),
            host=config.metrics_host,
            port=config.metrics_port,
            log_config=None
        )
    except KeyboardInterrupt:
        logger.info("Interrupted", event_type="server_shutdown")
    except Exception as e:
        log_error(logger, e, {"component": "main", "phase": "startup"})
        sys.exit(1)


if __name__ == '__main__':
    main()
