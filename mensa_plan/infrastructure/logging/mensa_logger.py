"""
Structured logging for the meal plan client.

Component loggers (`MensaLogger`) only emit records; they never own
handlers and always propagate, so a library user routes them with their
own logging config. Output for the CLI is installed once on the
`mensa_plan` logger by `configure_logging`.

Records carry the fetch context (location, endpoint generation and the
request URL without its query string, which holds the API key).
"""
import json
import logging
import sys
import time
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, TextIO

ROOT_LOGGER = "mensa_plan"
LOG_FILE_NAME = "mensa_plan.log"

_CONTEXT_FIELDS = ("correlation_id", "location", "generation", "operation", "url")
_OWNED = "_mensa_plan_owned"


def redact_url(url: str) -> str:
    """Strip the query string, which carries the API key."""
    return url.split("?", 1)[0]


def level_number(name: str) -> int:
    """Numeric level for a level name such as "debug". Raises ValueError."""
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name!r}")
    return level


@dataclass(frozen=True)
class LogContext:
    """Fetch context attached to every record of one operation."""
    correlation_id: Optional[str] = None
    location: Optional[str] = None
    generation: Optional[str] = None
    operation: Optional[str] = None
    url: Optional[str] = None
    fields: Dict[str, Any] = field(default_factory=dict)

    def with_operation(self, operation: str) -> 'LogContext':
        return replace(self, operation=operation)

    def with_location(self, location: str, generation: Optional[str] = None) -> 'LogContext':
        return replace(self, location=location, generation=generation or self.generation)

    def with_url(self, url: str) -> 'LogContext':
        return replace(self, url=redact_url(url))

    def with_fields(self, **kwargs) -> 'LogContext':
        return replace(self, fields={**self.fields, **kwargs})


@dataclass
class LogEntry:
    """One formatted record."""
    timestamp: str
    level: str
    message: str
    component: Optional[str] = None
    correlation_id: Optional[str] = None
    location: Optional[str] = None
    generation: Optional[str] = None
    operation: Optional[str] = None
    url: Optional[str] = None
    duration_ms: Optional[float] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    fields: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: logging.LogRecord, timestamp: str) -> 'LogEntry':
        return cls(
            timestamp=timestamp,
            level=record.levelname,
            message=record.getMessage(),
            component=getattr(record, "component", None),
            correlation_id=getattr(record, "correlation_id", None),
            location=getattr(record, "location", None),
            generation=getattr(record, "generation", None),
            operation=getattr(record, "operation", None),
            url=getattr(record, "url", None),
            duration_ms=getattr(record, "duration_ms", None),
            error=getattr(record, "error", None),
            error_type=getattr(record, "error_type", None),
            fields=getattr(record, "fields", None) or {},
        )

    def to_json(self) -> str:
        data = {k: v for k, v in asdict(self).items() if v is not None and v != {}}
        return json.dumps(data, default=str, ensure_ascii=False)

    def to_human(self) -> str:
        parts = [f"[{self.timestamp}]", f"[{self.level}]"]
        parts.extend(f"[{tag}]" for tag in (self.component, self.location, self.generation) if tag)
        parts.append(self.message)
        if self.url:
            parts.append(f"<{self.url}>")
        if self.duration_ms is not None:
            parts.append(f"({self.duration_ms:.2f}ms)")
        if self.error_type:
            parts.append(f"{self.error_type}: {self.error}")
        return " ".join(parts)


class StructuredFormatter(logging.Formatter):
    """JSON lines for machines, one bracketed line for humans."""

    def __init__(self, json_output: bool = False):
        super().__init__()
        self.json_output = json_output

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, timezone.utc)
        if self.json_output:
            return LogEntry.from_record(record, stamp.isoformat()).to_json()
        return LogEntry.from_record(record, stamp.strftime("%H:%M:%S")).to_human()


class MensaLogger:
    """
    Structured logger for one component.

    Usage:
        logger = MensaLogger("service")

        ctx = LogContext(location="rempart")
        with logger.timed_operation("fetch_one", ctx):
            await fetch()
    """

    def __init__(self, component: str, logger: Optional[logging.Logger] = None):
        self._component = component
        self._logger = logger or logging.getLogger(f"{ROOT_LOGGER}.{component}")

    def _log(
        self,
        level: int,
        message: str,
        context: Optional[LogContext],
        duration_ms: Optional[float] = None,
        error: Optional[str] = None,
        error_type: Optional[str] = None,
        **fields,
    ) -> None:
        if not self._logger.isEnabledFor(level):
            return
        extra: Dict[str, Any] = {
            "component": self._component,
            "duration_ms": duration_ms,
            "error": error,
            "error_type": error_type,
        }
        if context:
            extra.update({name: getattr(context, name) for name in _CONTEXT_FIELDS})
            fields = {**context.fields, **fields}
        extra["fields"] = fields
        self._logger.log(level, message, extra=extra)

    def debug(self, message: str, context: Optional[LogContext] = None, **kwargs) -> None:
        self._log(logging.DEBUG, message, context, **kwargs)

    def info(self, message: str, context: Optional[LogContext] = None, **kwargs) -> None:
        self._log(logging.INFO, message, context, **kwargs)

    def error(self, message: str, context: Optional[LogContext] = None, **kwargs) -> None:
        self._log(logging.ERROR, message, context, **kwargs)

    def timed_operation(self, operation: str, context: Optional[LogContext] = None) -> 'TimedOperation':
        return TimedOperation(self, operation, context)


class TimedOperation:
    """Logs the duration of a block. Never suppresses exceptions."""

    def __init__(self, logger: MensaLogger, operation: str, context: Optional[LogContext] = None):
        self._logger = logger
        self._operation = operation
        self.context = (context or LogContext()).with_operation(operation)
        self._started = 0.0

    def __enter__(self) -> 'TimedOperation':
        self._started = time.perf_counter()
        self._logger.debug(f"Starting {self._operation}", self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        duration_ms = (time.perf_counter() - self._started) * 1000
        if exc_type is None:
            self._logger.info(f"Completed {self._operation}", self.context, duration_ms=duration_ms)
        elif issubclass(exc_type, Exception):
            self._logger.error(
                f"Failed {self._operation}",
                self.context,
                duration_ms=duration_ms,
                error=str(exc_val),
                error_type=exc_type.__name__,
            )
        else:
            # CancelledError: a sibling fetch failed first
            self._logger.debug(f"Cancelled {self._operation}", self.context, duration_ms=duration_ms)
        return False


def reset_logging() -> None:
    """Remove and close the handlers installed by configure_logging."""
    root = logging.getLogger(ROOT_LOGGER)
    for handler in [h for h in root.handlers if getattr(h, _OWNED, False)]:
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_dir: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Install output handlers on the `mensa_plan` logger.

    Replaces (and closes) handlers from an earlier call, so calling it
    again never duplicates output. With log_dir, JSON lines are also
    appended to `<log_dir>/mensa_plan.log`.

    Raises:
        ValueError: If level is not a logging level name
    """
    numeric_level = level_number(level)
    reset_logging()

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(numeric_level)

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setFormatter(StructuredFormatter(json_output))
    handlers = [console_handler]

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path / LOG_FILE_NAME, encoding="utf-8")
        file_handler.setFormatter(StructuredFormatter(json_output=True))
        handlers.append(file_handler)

    for handler in handlers:
        setattr(handler, _OWNED, True)
        root.addHandler(handler)
    return root
