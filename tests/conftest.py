"""Shared pytest fixtures and configuration for aiready tests."""

import io
import json

import pytest

from aiready.config.settings import LoggingSettings, reset_settings
from aiready.infrastructure.logging import create_logger

LOGGING_ENV_VARS = (
    "ENVIRONMENT",
    "NODE_ENV",
    "LOG_LEVEL",
    "LOG_PRETTY",
    "SERVICE_NAME",
    "SERVICE_VERSION",
    "HOSTNAME",
    "HEALTH_CHECK_PATH",
    "INCLUDE_TRACE_ID",
)


@pytest.fixture(autouse=True)
def clean_logging_env(monkeypatch):
    """Keep the host environment out of settings built during tests."""
    for name in LOGGING_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


def make_settings(**overrides) -> LoggingSettings:
    values = {"environment": "production", "hostname": "test-host"}
    values.update(overrides)
    return LoggingSettings(_env_file=None, **values)


def parse_records(stream: io.StringIO):
    return [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def log_stream():
    return io.StringIO()


@pytest.fixture
def make_logger(log_stream):
    """Factory building an isolated logger that writes into ``log_stream``."""

    def factory(**overrides):
        return create_logger(make_settings(**overrides), stream=log_stream)

    return factory


@pytest.fixture
def records(log_stream):
    """Callable returning the JSON records written so far."""
    return lambda: parse_records(log_stream)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def build_settings():
    """Factory for LoggingSettings isolated from the environment and .env."""
    return make_settings
