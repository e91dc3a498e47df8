"""Structured logging for the macOS metrics exporter.

structlog renders on top of stdlib logging so uvicorn and library records
share the same handlers. JSON is the default output; set
``ENVIRONMENT=development`` for coloured console lines.
"""
import logging
import os
import sys
from typing import Any, Dict, List
import structlog
from structlog.stdlib import LoggerFactory
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer, TimeStamper, StackInfoRenderer


# Libraries that are chatty at INFO
QUIET_LOGGERS = ('uvicorn.access', 'fastapi', 'asyncio')


def _build_processors(development: bool) -> List[Any]:
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        TimeStamper(fmt="iso"),
        StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    processors.append(ConsoleRenderer() if development else JSONRenderer())
    return processors


def _build_handlers(config, level: int) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if config.log_file:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(config.log_file)))

    for handler in handlers:
        handler.setLevel(level)
    return handlers


def setup_structured_logging(config) -> None:
    """Configure structlog and the root logger from ``config``.

    Safe to call more than once; the root handlers are replaced each time.
    """
    development = os.getenv("ENVIRONMENT", "production").lower() == "development"
    level = getattr(logging, config.log_level.upper())

    structlog.configure(
        processors=_build_processors(development),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=_build_handlers(config, level),
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)


def log_metrics_collection(logger: structlog.stdlib.BoundLogger, metrics_count: int, collection_time: float,
                           errors: int = 0) -> None:
    """Log one finished scrape"""
    logger.info(
        "Metrics collection completed",
        metrics_count=metrics_count,
        collection_time_seconds=round(collection_time, 3),
        errors=errors,
        event_type="metrics_collection"
    )


def log_source_failure(logger: structlog.stdlib.BoundLogger, collector: str, reason: str) -> None:
    """Log an external command that failed, timed out or produced unreadable output"""
    logger.warning(
        "Source failed",
        collector=collector,
        error=reason,
        event_type="source_error"
    )


def log_server_startup(logger: structlog.stdlib.BoundLogger, config) -> None:
    """Log server startup with configuration details"""
    logger.info(
        "Server starting up",
        service_name=config.service_name,
        service_version=config.service_version,
        enabled_collectors=config.enabled_collectors,
        source_timeouts=config.source_timeouts(),
        metrics_host=config.metrics_host,
        metrics_port=config.metrics_port,
        event_type="server_startup"
    )


def log_error(logger: structlog.stdlib.BoundLogger, error: Exception, context: Dict[str, Any] = None) -> None:
    """Log error with structured context"""
    logger.error(
        "Error occurred",
        error=str(error),
        error_type=type(error).__name__,
        context=context or {},
        event_type="error",
        exc_info=True
    )
