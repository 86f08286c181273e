"""
Audit trail for security-relevant events.

One ``info`` record per event, written through the audit-typed child logger.
The trail is append-only; reading it back is left to whatever consumes the
output stream.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from aiready.infrastructure.logging.config import Logger
from aiready.infrastructure.logging.context import create_audit_logger


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def log_audit_event(
    audit_logger: Logger,
    event: str,
    user_id: Optional[str] = None,
    /,
    **context: Any,
) -> None:
    """
    Record a security event.

    Args:
        audit_logger: Logger tagged ``type="audit"``
        event: Event name, e.g. ``"user.login"``
        user_id: Acting user, omitted from the record when None
        **context: Free-form fields (ip, provider, ...)
    """
    audit_logger.info(**{
        "event": event,
        "userId": user_id,
        **context,
        "timestamp": _now_iso(),
    })


class AuditTrail:
    """Audit logger holder for injection into auth collaborators."""

    def __init__(self, logger: Logger):
        self.logger = create_audit_logger(logger)

    def record(self, event: str, user_id: Optional[str] = None, /, **context: Any) -> None:
        log_audit_event(self.logger, event, user_id, **context)
