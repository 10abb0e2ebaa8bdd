"""Structured logging for the storefront.

Events are written through structlog, which hands them to the standard
library root logger. Uvicorn, protean and sqlalchemy records therefore land
in the same console and rotating files as ours, and request context bound in
the HTTP middleware rides along on every event.

Environment:
    LOG_LEVEL   overrides the per-environment default level
    LOG_DIR     directory for storefront.log and storefront_error.log
    ENV / ENVIRONMENT / PROTEAN_ENV   pick the environment (first one set wins)
"""

import logging
import logging.handlers
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

_DEFAULT_LEVELS = {"production": "INFO", "staging": "INFO", "development": "DEBUG", "test": "WARNING"}
_JSON_ENVIRONMENTS = ("production", "staging")
_QUIET_LOGGERS = ("protean", "urllib3", "asyncio", "httpx")
_MAX_FILE_BYTES = 10 * 1024 * 1024
_FILES_KEPT = 5

_configured = False


@dataclass(frozen=True)
class LogSettings:
    environment: str
    level: str
    directory: Path

    @classmethod
    def from_env(cls) -> "LogSettings":
        environment = next(
            (os.environ[name] for name in ("ENV", "ENVIRONMENT", "PROTEAN_ENV") if os.getenv(name)),
            "development",
        ).lower()
        level = os.getenv("LOG_LEVEL") or _DEFAULT_LEVELS.get(environment, "INFO")
        return cls(environment=environment, level=level.upper(), directory=Path(os.getenv("LOG_DIR", "logs")))

    @property
    def as_json(self) -> bool:
        return self.environment in _JSON_ENVIRONMENTS


def _rotating_file(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path, maxBytes=_MAX_FILE_BYTES, backupCount=_FILES_KEPT, encoding="utf-8"
    )
    handler.setLevel(level)
    return handler


def _install_handlers(log: LogSettings) -> None:
    log.directory.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(log.level)

    root = logging.getLogger()
    root.setLevel(log.level)
    root.handlers = [
        console,
        _rotating_file(log.directory / "storefront.log", log.level),
        _rotating_file(log.directory / "storefront_error.log", logging.ERROR),
    ]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _processors(log: LogSettings) -> list:
    callsite = structlog.processors.CallsiteParameterAdder(
        parameters=[
            structlog.processors.CallsiteParameter.FILENAME,
            structlog.processors.CallsiteParameter.LINENO,
            structlog.processors.CallsiteParameter.FUNC_NAME,
        ]
    )
    renderer = (
        structlog.processors.JSONRenderer()
        if log.as_json
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        callsite,
        renderer,
    ]


def configure_logging() -> None:
    """Install handlers and structlog processors once per process.

    Both domain modules call this at import time.
    """
    global _configured
    if _configured:
        return

    log = LogSettings.from_env()
    _install_handlers(log)
    structlog.configure(
        processors=_processors(log),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind values onto every event logged later in this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
