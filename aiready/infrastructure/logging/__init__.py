"""
aiready Logging Infrastructure

Structured logging for the next-ai-ready service, built on structlog.

Components:
- levels: the six severities and their ordering
- config: environment-aware core logger construction (JSON or console lines,
  redaction, base fields)
- context: child loggers scoped to a component, the audit trail or a request
- performance: operation timers
- audit: security event trail
- errors: error normalization and error records
"""

from .levels import LOG_LEVELS, SILENT, LogLevel, is_enabled, parse_level
from .config import Logger, LoggerConfig, create_logger, resolve_config
from .context import (
    child,
    create_audit_logger,
    create_auth_logger,
    create_child_logger,
    create_component_logger,
    create_db_logger,
    create_request_logger,
)
from .performance import PerformanceTimer, log_success, start_timer, timed
from .audit import AuditTrail, log_audit_event
from .errors import StandardError, UnknownError, log_error, normalize_error
from .redaction import CENSOR, REDACT_PATHS, RedactionProcessor

__all__ = [
    # Levels
    'LOG_LEVELS',
    'SILENT',
    'LogLevel',
    'is_enabled',
    'parse_level',

    # Core
    'Logger',
    'LoggerConfig',
    'create_logger',
    'resolve_config',

    # Context scoping
    'child',
    'create_child_logger',
    'create_component_logger',
    'create_db_logger',
    'create_auth_logger',
    'create_audit_logger',
    'create_request_logger',

    # Helpers
    'PerformanceTimer',
    'start_timer',
    'timed',
    'log_success',
    'AuditTrail',
    'log_audit_event',
    'StandardError',
    'UnknownError',
    'normalize_error',
    'log_error',

    # Redaction
    'CENSOR',
    'REDACT_PATHS',
    'RedactionProcessor',
]
