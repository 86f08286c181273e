"""Dependency Injection Container

Builds the core logger once at process entry and holds the loggers that
collaborators receive: the core, the database and auth component loggers,
and the audit trail. Tests build their own container with an in-memory
stream instead of relying on a global.
"""

from typing import Optional, TextIO

from aiready.api.middleware.logging import Handler, with_logging
from aiready.config.settings import LoggingSettings, get_settings
from aiready.infrastructure.logging import (
    AuditTrail,
    Logger,
    PerformanceTimer,
    create_auth_logger,
    create_component_logger,
    create_db_logger,
    create_logger,
    log_error,
    start_timer,
)


class LoggingContainer:
    """
    Owner of the process logger tree.

    Attributes:
        settings: Settings the core logger was built from
        logger: Core logger
        db_logger: Child tagged ``component="database"``
        auth_logger: Child tagged ``component="auth"``
        audit: Audit trail writing through a ``type="audit"`` child
    """

    def __init__(self, settings: Optional[LoggingSettings] = None, *, stream: Optional[TextIO] = None):
        self.settings = settings if settings is not None else get_settings()
        self.logger: Logger = create_logger(self.settings, stream=stream)
        self.db_logger = create_db_logger(self.logger)
        self.auth_logger = create_auth_logger(self.logger)
        self.audit = AuditTrail(self.logger)

    def component(self, name: str) -> Logger:
        return create_component_logger(self.logger, name)

    def timer(self, operation: str) -> PerformanceTimer:
        return start_timer(self.logger, operation)

    def log_error(self, error, /, **context) -> None:
        log_error(self.logger, error, **context)

    def with_logging(self, handler: Handler):
        """Wrap an API handler using this container's logger and health path."""
        return with_logging(handler, self.logger, health_check_path=self.settings.health_check_path)
