"""
Structured logging for matchstreams services.
structlog renders either a colored console view (dev) or one JSON object per line.
"""
from __future__ import annotations

import logging
import sys
from typing import Any, Optional

import structlog
from shared.config import Settings, get_settings

_NOISY_LOGGERS = ("httpx", "httpcore", "asyncio")


def _renderer(settings: Settings) -> structlog.types.Processor:
    if settings.environment.value == "dev":
        return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    # Feed content is mostly Chinese text; keep it readable in the JSON lines.
    return structlog.processors.JSONRenderer(ensure_ascii=False)


def setup_logging(
    service_name: str,
    extra_context: dict[str, Any] | None = None,
    settings: Optional[Settings] = None,
) -> None:
    """
    Configure structured logging for a service.

    Args:
        service_name: The service identifier bound to every entry (e.g. "merger").
        extra_context: Additional static context fields bound to every log entry.
        settings: Overrides the process-wide settings (tests, one-off scripts).
    """
    settings = settings or get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(settings),
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)

    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    structlog.contextvars.clear_contextvars()
    bound: dict[str, Any] = {"service": service_name, "instance_id": settings.instance_id}
    if extra_context:
        bound.update(extra_context)
    structlog.contextvars.bind_contextvars(**bound)


def bind_run_context(**fields: Any) -> None:
    """Attach per-run fields (run_id, trigger) to every subsequent entry."""
    structlog.contextvars.bind_contextvars(**fields)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a named structured logger."""
    return structlog.get_logger(name)
