"""Structured logging configuration using structlog."""

import json
import logging
import sys
from functools import lru_cache

import structlog

# Third-party loggers that are only interesting at DEBUG
_NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "redis", "asyncio", "uvicorn.access")


class PrettyJsonRenderer:
    """Renderer for human-readable logs with indented context.

    Outputs logs in format:
        LEVEL TIMESTAMP event - {
          "key": "value"
        }
    """

    def __call__(
        self,
        logger: structlog.types.WrappedLogger,
        method_name: str,
        event_dict: structlog.types.EventDict,
    ) -> str:
        timestamp = event_dict.pop("timestamp", "")
        level = event_dict.pop("level", method_name).upper()
        event = event_dict.pop("event", "")
        prefix = f"{level} {timestamp} {event}"

        if not event_dict:
            return prefix

        body = json.dumps(event_dict, indent=2, ensure_ascii=False, default=str)
        head, *rest = body.split("\n")
        return "\n".join([f"{prefix} - {head}"] + [f"    {line}" for line in rest])


def setup_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: "json" (compact), "pretty" (indented) or "console" (colored dev)
    """
    level = getattr(logging, log_level.upper())

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        final_processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    elif log_format == "pretty":
        final_processors = shared_processors + [
            structlog.processors.format_exc_info,
            PrettyJsonRenderer(),
        ]
    else:
        final_processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=final_processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_logger(name: str = "creator_feed") -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Logger name (typically module name)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
