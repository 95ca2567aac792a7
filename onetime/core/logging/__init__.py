"""
Logging configuration module for structured logging.

Configures structlog with ISO timestamps and log levels, rendering JSON for
deployed environments and human-readable console output for development.
"""

import logging

import structlog

from onetime.core.config.settings import settings


def configure_logging(log_level: str | None = None, json_logs: bool | None = None) -> None:
    """
    Configures structlog and the standard library root logger.

    Args:
        log_level: Level name, defaults to ``settings.LOG_LEVEL``.
        json_logs: Render JSON instead of console output, defaults to
            ``settings.LOG_JSON``.
    """
    level = (log_level or settings.LOG_LEVEL).upper()
    use_json = settings.LOG_JSON if json_logs is None else json_logs

    logging.basicConfig(format="%(message)s", level=level)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger()
