"""
Structured logging setup using structlog
"""
import logging
import sys
from typing import Any, Optional

import structlog

# Chatty third-party loggers used by the outbound HTTP clients
NOISY_LOGGERS = ("urllib3", "requests")


def setup_logging(
    log_level: str = "INFO",
    is_debug: bool = False,
    service_name: Optional[str] = None
) -> None:
    """
    Configure structured logging

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR)
        is_debug: Debug mode (human-readable console output)
        service_name: Bound to every event as "service"
    """
    level = getattr(logging, log_level.upper())

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    # Connection pool chatter only in debug mode
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level if is_debug else max(level, logging.WARNING))

    processors = [
        structlog.contextvars.merge_contextvars,
        _service_tagger(service_name),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if is_debug:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _service_tagger(service_name: Optional[str]):
    def add_service(logger: Any, method_name: str, event_dict: dict) -> dict:
        if service_name:
            event_dict.setdefault("service", service_name)
        return event_dict
    return add_service


def get_logger(name: str) -> Any:
    """Logger for a module, e.g. get_logger(__name__)"""
    return structlog.get_logger(name)
