"""
Context-scoped child loggers.

A child is the parent with extra fields bound on top. It shares the parent's
sink, level threshold and redaction rules; the parent is never modified.
"""

from typing import Any, Mapping, Optional

from aiready.infrastructure.logging.config import Logger


def child(logger: Logger, /, **fields: Any) -> Logger:
    """Return a logger with ``fields`` merged over the parent's bound fields."""
    return logger.bind(**fields)


def create_child_logger(logger: Logger, context: Optional[Mapping[str, Any]] = None) -> Logger:
    return child(logger, **dict(context or {}))


def create_component_logger(logger: Logger, name: str) -> Logger:
    """
    Child logger tagged with a component name.

    Example:
        >>> billing_logger = create_component_logger(logger, "billing")
        >>> billing_logger.info("Invoice sent", invoiceId="inv_42")
    """
    return child(logger, component=name)


def create_db_logger(logger: Logger) -> Logger:
    return create_component_logger(logger, "database")


def create_auth_logger(logger: Logger) -> Logger:
    return create_component_logger(logger, "auth")


def create_audit_logger(logger: Logger) -> Logger:
    return child(logger, type="audit")


def _header(headers: Optional[Mapping[str, Any]], name: str) -> Any:
    if not headers:
        return None
    value = headers.get(name)
    if value is None:
        # Plain dicts may carry headers with their original casing
        lowered = name.lower()
        for key, candidate in headers.items():
            if isinstance(key, str) and key.lower() == lowered:
                return candidate
    return value


def client_address(headers: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Client address from the forwarding headers: x-forwarded-for, then x-real-ip."""
    return _header(headers, "x-forwarded-for") or _header(headers, "x-real-ip")


def create_request_logger(logger: Logger, request: Any) -> Logger:
    """
    Child logger carrying the request line and client details under ``req``.

    Args:
        logger: Parent logger
        request: Object exposing ``method``, ``url`` and ``headers``

    Returns:
        Logger whose records include ``req={method, url, userAgent, ip}``
    """
    headers = getattr(request, "headers", None)
    req = {
        "method": getattr(request, "method", None),
        "url": getattr(request, "url", None),
        "userAgent": _header(headers, "user-agent"),
        "ip": client_address(headers),
    }
    return child(logger, req={key: value for key, value in req.items() if value is not None})
