"""
Structured logging setup.

Application code logs through structlog; records from the standard library
(uvicorn, SQLAlchemy) are routed through the same formatter so the whole
process writes one format: JSON lines in production, coloured console output
everywhere else. Each line carries the request id of the request being served.
"""

import logging
import sys
from typing import Any

import structlog
from asgi_correlation_id import correlation_id

from eventboard.config import Settings

HANDLER_NAME = "eventboard"


def add_request_id(logger, method_name, event_dict):
    request_id = correlation_id.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def _renderer(settings: Settings):
    if settings.is_production:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def _tune_library_loggers(settings: Settings) -> None:
    # RequestLoggingMiddleware already writes an access line per request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.DB_ECHO else logging.WARNING)


def configure_logging(settings: Settings) -> None:
    pre_chain: list[Any] = [
        add_request_id,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if settings.is_production:
        pre_chain.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, _renderer(settings)],
        )
    )

    root = logging.getLogger()
    # create_app can run many times in one process; replace our handler rather than stack it
    root.handlers = [h for h in root.handlers if h.get_name() != HANDLER_NAME]
    root.addHandler(handler)
    root.setLevel(settings.LOG_LEVEL.upper())
    _tune_library_loggers(settings)
