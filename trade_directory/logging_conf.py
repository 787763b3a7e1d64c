"""structlog setup forwarding into JSON-formatted stdlib handlers."""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Iterable

import structlog

from .config.loader import resolve_project_root

ROOT_LOGGER = "trade_directory"
AGGREGATOR_LOG = "aggregator.log"
ERROR_LOG = "error.log"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Directory the handlers currently write to; None until first configured
_configured_dir: Path | None = None


def log_directory() -> Path:
    return resolve_project_root() / "logs"


def _handlers(log_dir: Path, level: str) -> dict[str, dict]:
    def file_handler(filename: str, handler_level: str) -> dict:
        return {
            "class": "logging.FileHandler",
            "level": handler_level,
            "filename": str(log_dir / filename),
            "formatter": "json",
            "encoding": "utf-8",
        }

    return {
        "console": {"class": "logging.StreamHandler", "level": level, "formatter": "json"},
        "aggregator_file": file_handler(AGGREGATOR_LOG, "INFO"),
        "error_file": file_handler(ERROR_LOG, "ERROR"),
    }


def configure_logging(verbose: bool = False) -> structlog.BoundLogger:
    """Install handlers under the current log directory and route structlog to them.

    Calling again is a no-op unless ``TRADE_DIRECTORY_HOME`` now points
    somewhere else, in which case the handlers are rebuilt for the new place.
    """

    global _configured_dir
    log_dir = log_directory()
    (log_dir / "sources").mkdir(parents=True, exist_ok=True)
    if _configured_dir == log_dir:
        return structlog.get_logger(ROOT_LOGGER)

    level = "DEBUG" if verbose else "INFO"
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                    "fmt": JSON_FORMAT,
                }
            },
            "handlers": _handlers(log_dir, level),
            "loggers": {
                ROOT_LOGGER: {
                    "handlers": ["console", "aggregator_file", "error_file"],
                    "level": level,
                    "propagate": False,
                },
            },
        }
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.render_to_log_kwargs,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    _configured_dir = log_dir
    return structlog.get_logger(ROOT_LOGGER)


def source_log_path(source_name: str) -> Path:
    return log_directory() / "sources" / f"{source_name.lower()}.log"


def source_logger(source_name: str, verbose: bool = False) -> structlog.BoundLogger:
    """Logger bound to ``source=<name>`` that also writes ``logs/sources/<name>.log``."""

    configure_logging(verbose)
    path = source_log_path(source_name)
    py_logger = logging.getLogger(f"{ROOT_LOGGER}.source.{source_name.lower()}")
    has_handler = any(
        isinstance(handler, logging.FileHandler) and handler.baseFilename == str(path)
        for handler in py_logger.handlers
    )
    if not has_handler:
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setLevel(logging.INFO)
        parent_handlers = logging.getLogger(ROOT_LOGGER).handlers
        if parent_handlers:
            handler.setFormatter(parent_handlers[0].formatter)
        py_logger.addHandler(handler)
    return structlog.get_logger(py_logger.name).bind(source=source_name)


def tail_log(path: Path, line_count: int = 100) -> list[str]:
    if not path.exists():
        return []
    with path.open("r", encoding="utf-8", errors="ignore") as stream:
        lines = stream.readlines()
    return lines[-line_count:]


def available_source_logs() -> Iterable[Path]:
    sources_dir = log_directory() / "sources"
    if not sources_dir.exists():
        return []
    return sorted(sources_dir.glob("*.log"))


__all__ = [
    "available_source_logs",
    "configure_logging",
    "log_directory",
    "source_log_path",
    "source_logger",
    "tail_log",
]
