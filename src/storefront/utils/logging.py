"""Logging for the storefront service.

Records go through stdlib logging to stdout and a rotating ``storefront.log``.
structlog renders them as JSON in production and staging, and as a coloured
console view everywhere else. Request middleware binds the request id, session
id, method and path so every event logged while serving a request carries them.
"""

import logging
import logging.handlers
import sys
from pathlib import Path

import structlog

from storefront.config import Settings, get_settings

LOG_FILE = "storefront.log"
JSON_ENVIRONMENTS = ("production", "staging")
LEVEL_BY_ENVIRONMENT = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}
QUIET_LOGGERS = ("protean", "uvicorn.access", "asyncio")


def resolve_log_level(settings: Settings) -> str:
    """Explicit ``LOG_LEVEL`` wins, otherwise the environment decides."""
    if settings.log_level:
        return settings.log_level.upper()
    return LEVEL_BY_ENVIRONMENT.get(settings.environment, "INFO")


def _install_handlers(level: str, log_dir: str) -> None:
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_path / LOG_FILE,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [logging.StreamHandler(sys.stdout), file_handler]

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _renderer(environment: str):
    if environment in JSON_ENVIRONMENTS:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=True, max_frames=2),
    )


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    _install_handlers(resolve_log_level(settings), settings.log_dir)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                ]
            ),
            _renderer(settings.environment),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str, session_id: str, method: str, path: str) -> None:
    """Replace whatever a previous request left bound with this request's fields."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        session_id=session_id,
        method=method,
        path=path,
    )


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
