"""Log output for the taskboard API.

Store failures, task creation and start-up are logged as structlog
events. uvicorn and SQLAlchemy keep their stdlib loggers; their records are
rendered by the same formatter so one process writes one format
(``LOG_FORMAT=json`` in deployments, a console layout otherwise).
"""

import logging

import structlog

from .config import settings

# No per-request access log; SQL echo is opt-in via DATABASE_ECHO.
_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine")


def _renderer(log_format: str):
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(log_level: str | None = None, log_format: str | None = None) -> None:
    level = getattr(logging, (log_level or settings.LOG_LEVEL).upper(), logging.INFO)
    log_format = log_format or settings.LOG_FORMAT

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if log_format == "json":
        pre_chain.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(log_format),
            foreign_pre_chain=pre_chain,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    if settings.DATABASE_ECHO:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
