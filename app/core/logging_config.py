# app/core/logging_config.py
import logging
import sys

import structlog


def setup_logging(level: str = "INFO") -> None:
    """
    Configure structlog + standaard logging.
    Logs gaan als JSON naar stdout.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


# Globale logger die je overal kunt importeren
logger = structlog.get_logger("autoinvoice")
