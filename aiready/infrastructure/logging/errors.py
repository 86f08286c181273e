"""
Error normalization and error-record emission.

Anything can reach an error handler: exceptions, error-like objects from
other libraries, plain strings. ``normalize_error`` turns each into one of two
shapes at the boundary, and ``log_error`` writes it at error severity without
ever raising.
"""

import logging
import traceback
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from aiready.infrastructure.logging.config import Logger

UNKNOWN_ERROR_NAME = "Unknown"

_internal_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StandardError:
    """Error value that carried its own name, message and (maybe) stack."""
    name: str
    message: str
    stack: Optional[str] = None

    def to_fields(self) -> Dict[str, Any]:
        fields: Dict[str, Any] = {"name": self.name, "message": self.message}
        if self.stack:
            fields["stack"] = self.stack
        return fields


@dataclass(frozen=True)
class UnknownError:
    """Any other raised value, kept as its string conversion."""
    value: str

    def to_fields(self) -> Dict[str, Any]:
        return {"name": UNKNOWN_ERROR_NAME, "message": self.value}


NormalizedError = Union[StandardError, UnknownError]


def _format_stack(error: BaseException) -> Optional[str]:
    if error.__traceback__ is None:
        return None
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))


def _safe_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        try:
            return repr(value)
        except Exception:
            return f"<unprintable {type(value).__name__}>"


def normalize_error(error: Any) -> NormalizedError:
    """
    Normalize a raised value.

    Exceptions give their class name, ``str()`` and formatted traceback.
    Objects or mappings with string ``name`` and ``message`` are taken as-is,
    with their ``stack`` when present. Everything else becomes UnknownError.
    """
    if isinstance(error, BaseException):
        return StandardError(type(error).__name__, _safe_str(error), _format_stack(error))

    if isinstance(error, Mapping):
        name, message, stack = error.get("name"), error.get("message"), error.get("stack")
    else:
        name = getattr(error, "name", None)
        message = getattr(error, "message", None)
        stack = getattr(error, "stack", None)
    if isinstance(name, str) and isinstance(message, str):
        return StandardError(name, message, stack if isinstance(stack, str) else None)

    return UnknownError(_safe_str(error))


def error_fields(error: Any) -> Dict[str, Any]:
    return normalize_error(error).to_fields()


def log_error(logger: Logger, error: Any, /, **context: Any) -> None:
    """
    Emit one ``error`` record for ``error``.

    Args:
        logger: Logger to write through
        error: Any raised value
        **context: Extra fields merged into the record

    Failures while building or writing the record are reported through the
    standard library logger and never reach the caller.
    """
    try:
        logger.error(**{**context, "error": error_fields(error), "msg": "Error occurred"})
    except Exception:
        _internal_logger.warning("Failed to emit error record", exc_info=True)
