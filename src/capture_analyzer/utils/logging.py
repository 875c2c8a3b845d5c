"""Structured logging utilities."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog for console-friendly JSON logging."""

    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=numeric)
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Return a structured logger."""

    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)


def log_config(logger: structlog.stdlib.BoundLogger, config: Dict[str, Any]) -> None:
    """Log a configuration snapshot."""

    logger.info("config", **config)
