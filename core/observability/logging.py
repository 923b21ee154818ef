"""
Correlated logging for stores, repositories and controllers.

Every log line carries the correlation of the user action that caused it:
- table: remote table being read or written
- entity_id: record the operation is about
- operation: load, create, update or delete
- page: controller (page) that triggered the call
- request_id: HTTP request, when running behind the API

Usage:
    from core.observability.logging import get_logger, with_correlation

    logger = get_logger(__name__)

    with with_correlation(table="tasks", operation="load"):
        logger.info("Loading tasks")
"""

import json
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional


# =============================================================================
# Correlation
# =============================================================================

@dataclass(frozen=True)
class CorrelationContext:
    """Identifiers shared by every log line of one user action."""
    table: Optional[str] = None
    entity_id: Optional[str] = None
    operation: Optional[str] = None
    page: Optional[str] = None
    request_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Set fields only."""
        return {key: value for key, value in asdict(self).items() if value is not None}

    def merge(self, **changes) -> "CorrelationContext":
        """Copy with the given fields overridden; None leaves a field as is."""
        return replace(self, **{key: value for key, value in changes.items() if value is not None})

    @property
    def path(self) -> str:
        """Short `table/operation/entity` form for human-readable lines."""
        parts = [part for part in (self.table, self.operation, self.entity_id) if part]
        return "/".join(parts) or "-"


_current: ContextVar[CorrelationContext] = ContextVar("farm_correlation", default=CorrelationContext())


def get_correlation_context() -> CorrelationContext:
    return _current.get()


@contextmanager
def with_correlation(**fields) -> Iterator[CorrelationContext]:
    """Add correlation fields for the duration of the block.

    Nested blocks inherit the outer fields. Each asyncio task sees its own
    context, so concurrent loads do not mix their ids.
    """
    token = _current.set(_current.get().merge(**fields))
    try:
        yield _current.get()
    finally:
        _current.reset(token)


# =============================================================================
# Formatters
# =============================================================================

def _timestamp(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


class StructuredFormatter(logging.Formatter):
    """One JSON object per line.

    {"timestamp": "2024-01-09T12:00:00.000Z", "level": "ERROR",
     "logger": "stores.base", "message": "Failed to load tasks: ...",
     "table": "tasks", "operation": "load"}
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": _timestamp(record).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(get_correlation_context().to_dict())
        payload.update(getattr(record, "extra_fields", None) or {})
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Console lines, e.g.

    2024-01-09 12:00:00 [INFO ] stores.base [tasks/update/T001]: Updated task
    """

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_correlation_context()
        line = (
            f"{_timestamp(record):%Y-%m-%d %H:%M:%S} [{record.levelname:5}] "
            f"{record.name} [{ctx.path}]: {record.getMessage()}"
        )
        if ctx.page:
            line += f" (page={ctx.page})"
        if ctx.request_id:
            line += f" (request={ctx.request_id})"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


# =============================================================================
# Logger
# =============================================================================

class CorrelatedLogger:
    """Thin wrapper over `logging.Logger` that accepts `extra_fields=`.

    Extra fields are attached to the record and emitted by the JSON
    formatter alongside the correlation ids.
    """

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    def _log(self, level: int, msg: str, *args, extra_fields: Optional[Dict[str, Any]] = None,
             exc_info: Any = None) -> None:
        if not self._logger.isEnabledFor(level):
            return
        # stacklevel points the record at the caller of debug()/info()/...
        self._logger.log(
            level, msg, *args,
            exc_info=exc_info,
            extra={"extra_fields": extra_fields or {}},
            stacklevel=3,
        )

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.ERROR, msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs) -> None:
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, msg, *args, **kwargs)

    def setLevel(self, level) -> None:
        self._logger.setLevel(level)

    def isEnabledFor(self, level) -> bool:
        return self._logger.isEnabledFor(level)


# =============================================================================
# Configuration
# =============================================================================

APP_LOGGERS = ("stores", "connectors", "controllers", "api", "core", "store_client")
QUIET_LOGGERS = ("aiohttp", "httpx", "uvicorn.access")

_loggers: Dict[str, CorrelatedLogger] = {}
_handler: Optional[logging.Handler] = None


def configure_logging(level: int = logging.INFO, json_format: bool = False, force: bool = False) -> None:
    """Install one stdout handler on the root logger.

    Args:
        level: Level for the handler and the application loggers
        json_format: Emit JSON lines instead of console lines
        force: Replace a handler installed by an earlier call
    """
    global _handler

    root = logging.getLogger()
    if _handler is not None:
        if not force:
            return
        root.removeHandler(_handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(StructuredFormatter() if json_format else HumanReadableFormatter())
    root.addHandler(handler)
    root.setLevel(level)
    _handler = handler

    for name in APP_LOGGERS:
        logging.getLogger(name).setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> CorrelatedLogger:
    """Correlated logger for a module; configures logging on first use."""
    if _handler is None:
        configure_logging()
    if name not in _loggers:
        _loggers[name] = CorrelatedLogger(logging.getLogger(name))
    return _loggers[name]
