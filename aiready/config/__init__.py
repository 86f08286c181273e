"""Configuration Package

Environment-driven settings for the aiready logging core.
"""

from .settings import LoggingSettings, ServerSettings, get_settings, reset_settings

__all__ = ["LoggingSettings", "ServerSettings", "get_settings", "reset_settings"]
