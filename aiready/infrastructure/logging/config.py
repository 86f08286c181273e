"""
aiready Logging Configuration

Builds the process logger from LoggingSettings: a structlog processor chain
wrapped around a single line sink. The chain adapts to the running
environment:

- development: debug and above, colorized console lines, no redaction
- production: info and above, one JSON object per line, sensitive paths redacted
- test: nothing is emitted, whatever LOG_LEVEL says

The logger is built once at process entry and handed to collaborators;
children created with ``bind`` share the parent's sink and processors.
"""

import os
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, TextIO, Union

import structlog
from opentelemetry import trace

from aiready.config.settings import LoggingSettings, get_settings
from aiready.exceptions import ConfigurationError
from aiready.infrastructure.logging.levels import (
    LOG_LEVELS,
    SILENT,
    LogLevel,
    is_enabled,
    parse_level,
)
from aiready.infrastructure.logging.redaction import CENSOR, REDACT_PATHS, RedactionProcessor

DEVELOPMENT = "development"
PRODUCTION = "production"
TEST = "test"
ENVIRONMENTS = (DEVELOPMENT, PRODUCTION, TEST)

DEFAULT_LEVELS = {
    DEVELOPMENT: LogLevel.DEBUG,
    PRODUCTION: LogLevel.INFO,
}

MESSAGE_KEY = "msg"
TIMESTAMP_KEY = "time"

# Base fields left out of console lines
CONSOLE_HIDDEN_FIELDS = ("pid", "hostname")


@dataclass(frozen=True)
class LoggerConfig:
    """
    Resolved configuration shared by a core logger and all of its children.

    Attributes:
        environment: Running environment name
        threshold: Minimum level weight a record needs to be emitted
        pretty: Render human-readable console lines instead of JSON
        redact: Apply the redaction path list before rendering
        base_fields: Static fields merged into every record
        redact_paths: Paths censored when ``redact`` is set
    """
    environment: str
    threshold: float
    pretty: bool
    redact: bool
    base_fields: Mapping[str, Any] = field(default_factory=dict)
    redact_paths: tuple = REDACT_PATHS

    @property
    def level_name(self) -> str:
        if self.threshold == SILENT:
            return "silent"
        return LogLevel(int(self.threshold)).label


class LogSink:
    """Line-oriented output stream shared by a logger tree."""

    def __init__(self, config: LoggerConfig, stream: Optional[TextIO] = None):
        self.config = config
        self.stream = stream if stream is not None else sys.stdout

    def msg(self, line: str) -> None:
        # One write call per record keeps lines whole on a shared stream
        self.stream.write(line + "\n")
        self.stream.flush()


class Logger(structlog.BoundLoggerBase):
    """
    Structured logger with the six aiready severities.

    ``log`` is the single emission entry point: a mapping of fields plus an
    optional human-readable message stored under ``msg``. The level methods
    are shorthands for it.

    Example:
        >>> logger.info("Incoming request", requestId=request_id, method="GET")
        >>> logger.log(LogLevel.WARN, {"attempt": 3}, "Retrying")
    """

    @property
    def config(self) -> LoggerConfig:
        return self._logger.config

    @property
    def context(self) -> Dict[str, Any]:
        """Copy of the fields bound into this logger."""
        return dict(self._context)

    def is_level_enabled(self, level: Union[LogLevel, int]) -> bool:
        return is_enabled(level, self._logger.config.threshold)

    def log(
        self,
        level: Union[LogLevel, int, str],
        fields: Optional[Mapping[str, Any]] = None,
        msg: Optional[str] = None,
    ) -> None:
        """
        Emit one record.

        Args:
            level: LogLevel, its weight, or its name
            fields: Caller fields; they override bound fields on key collision
            msg: Optional summary written under ``msg``
        """
        level = _coerce_level(level)
        if not self.is_level_enabled(level):
            return

        event_kw = dict(fields or {})
        if msg is not None:
            event_kw[MESSAGE_KEY] = msg

        try:
            args, kwargs = self._process_event(level.label, None, event_kw)
        except structlog.DropEvent:
            return
        self._logger.msg(*args, **kwargs)

    def trace(self, msg: Optional[str] = None, /, **fields: Any) -> None:
        self.log(LogLevel.TRACE, fields, msg)

    def debug(self, msg: Optional[str] = None, /, **fields: Any) -> None:
        self.log(LogLevel.DEBUG, fields, msg)

    def info(self, msg: Optional[str] = None, /, **fields: Any) -> None:
        self.log(LogLevel.INFO, fields, msg)

    def warn(self, msg: Optional[str] = None, /, **fields: Any) -> None:
        self.log(LogLevel.WARN, fields, msg)

    def error(self, msg: Optional[str] = None, /, **fields: Any) -> None:
        self.log(LogLevel.ERROR, fields, msg)

    def fatal(self, msg: Optional[str] = None, /, **fields: Any) -> None:
        self.log(LogLevel.FATAL, fields, msg)

    warning = warn


def _coerce_level(level: Union[LogLevel, int, str]) -> LogLevel:
    if isinstance(level, str):
        parsed = parse_level(level)
        if parsed is None:
            raise ValueError(f"Unknown log level: {level!r}")
        return parsed
    return LogLevel(level)


# =============================================================================
# PROCESSORS
# =============================================================================

def add_level(logger, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Write the level label; Logger.log passes it as the method name."""
    event_dict["level"] = method_name
    return event_dict


def drop_unset_values(logger, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """
    Remove top-level fields whose value is None.

    Nested values are logged as given; a None inside a payload is data.
    """
    return {key: value for key, value in event_dict.items() if value is not None}


def add_trace_context(logger, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """
    Add OpenTelemetry trace context to log entries.

    Only applies while a span is recording; existing fields are kept.
    """
    span = trace.get_current_span()
    if span and span.is_recording():
        span_context = span.get_span_context()
        event_dict.setdefault("traceId", format(span_context.trace_id, "032x"))
        event_dict.setdefault("spanId", format(span_context.span_id, "016x"))
    return event_dict


def prepare_console_line(logger, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Shape a record for the console: hide process fields, prefix the service."""
    for key in CONSOLE_HIDDEN_FIELDS:
        event_dict.pop(key, None)
    service = event_dict.get("service")
    message = event_dict.get(MESSAGE_KEY)
    if service:
        message = f"[{service}] {message}" if message is not None else f"[{service}]"
    event_dict[MESSAGE_KEY] = "" if message is None else str(message)
    return event_dict


def console_renderer() -> structlog.dev.ConsoleRenderer:
    level_styles = structlog.dev.ConsoleRenderer.get_default_level_styles(colors=True)
    level_styles.setdefault("fatal", level_styles.get("critical", ""))
    level_styles.setdefault("trace", level_styles.get("debug", ""))
    return structlog.dev.ConsoleRenderer(
        colors=True,
        level_styles=level_styles,
        event_key=MESSAGE_KEY,
        timestamp_key=TIMESTAMP_KEY,
    )


def build_processors(config: LoggerConfig, include_trace_context: bool = True) -> List[Any]:
    """
    Assemble the processor chain for a resolved configuration.

    Order: level label, timestamp, trace ids, unset-field removal, redaction,
    rendering.
    """
    processors: List[Any] = [
        add_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key=TIMESTAMP_KEY),
    ]
    if include_trace_context:
        processors.append(add_trace_context)
    processors.append(drop_unset_values)
    if config.redact:
        processors.append(RedactionProcessor(config.redact_paths, CENSOR))

    if config.pretty:
        processors.extend([prepare_console_line, console_renderer()])
    else:
        processors.append(structlog.processors.JSONRenderer())
    return processors


# =============================================================================
# CONSTRUCTION
# =============================================================================

def resolve_config(settings: LoggingSettings) -> LoggerConfig:
    """
    Turn settings into a LoggerConfig.

    Raises:
        ConfigurationError: If LOG_LEVEL or the environment name is not recognized
    """
    environment = (settings.environment or DEVELOPMENT).strip().lower()
    if environment not in ENVIRONMENTS:
        raise ConfigurationError(
            f"Unknown environment {settings.environment!r}; expected one of {', '.join(ENVIRONMENTS)}",
            details={"environment": settings.environment},
        )

    override = None
    if settings.log_level is not None and settings.log_level.strip():
        override = parse_level(settings.log_level)
        if override is None:
            raise ConfigurationError(
                f"Invalid LOG_LEVEL {settings.log_level!r}; expected one of {', '.join(LOG_LEVELS)}",
                details={"log_level": settings.log_level},
            )

    if environment == TEST:
        threshold: float = SILENT
    elif override is not None:
        threshold = int(override)
    else:
        threshold = int(DEFAULT_LEVELS[environment])

    base_fields = {
        "pid": os.getpid(),
        "hostname": settings.hostname,
        "service": settings.service_name,
        "version": settings.service_version,
        "env": environment,
    }

    return LoggerConfig(
        environment=environment,
        threshold=threshold,
        pretty=environment == DEVELOPMENT or (settings.log_pretty and environment != TEST),
        redact=environment == PRODUCTION,
        base_fields=base_fields,
    )


def create_logger(
    settings: Optional[LoggingSettings] = None,
    *,
    stream: Optional[TextIO] = None,
) -> Logger:
    """
    Build the core logger.

    Args:
        settings: Logging settings; read from the environment when omitted
        stream: Output stream, standard output by default

    Returns:
        Logger carrying the base fields, ready to be passed to collaborators

    Raises:
        ConfigurationError: If the settings name an unknown level or environment

    Example:
        >>> logger = create_logger(LoggingSettings(environment="production"))
        >>> logger.info("Service started", port=3000)
    """
    settings = settings if settings is not None else get_settings()
    config = resolve_config(settings)
    sink = LogSink(config, stream)
    processors = build_processors(config, include_trace_context=settings.include_trace_context)
    return Logger(sink, processors, dict(config.base_fields))
