"""Custom exceptions for the aiready application."""

from typing import Any, Dict, Optional


class AiReadyException(Exception):
    """Base exception for all aiready errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(AiReadyException):
    """Raised when logging configuration is invalid."""
    pass
