"""
Structured Logging (structlog).

Events are named in snake_case (``export_task_enqueued``) with context passed
as keyword arguments. Everything goes to stderr: stdout carries the MCP stdio
protocol and must stay clean.
"""

import logging
import sys

import structlog

from nexport_config.settings import Settings

# Libraries that log every HTTP request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def _renderer(log_format: str):
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(settings: Settings) -> None:
    """
    Configure structlog on top of stdlib logging.

    Output format: JSON (default) or text (dev)
    """
    level = settings.LOG_LEVEL.upper()
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, logging.getLevelName(level)))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _renderer(settings.LOG_FORMAT),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get configured logger."""
    return structlog.get_logger(name)
