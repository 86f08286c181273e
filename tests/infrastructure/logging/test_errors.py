"""
Test module for aiready.infrastructure.logging.errors
"""

import logging
from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from aiready.infrastructure.logging.config import create_logger
from aiready.infrastructure.logging.errors import (
    StandardError,
    UnknownError,
    error_fields,
    log_error,
    normalize_error,
)


class Unprintable:
    def __str__(self):
        raise RuntimeError("no str")

    def __repr__(self):
        raise RuntimeError("no repr")


class TestNormalizeError:
    """Test cases for error normalization."""

    def test_raised_exception(self):
        try:
            raise ValueError("bad input")
        except ValueError as error:
            normalized = normalize_error(error)

        assert isinstance(normalized, StandardError)
        assert normalized.name == "ValueError"
        assert normalized.message == "bad input"
        assert "Traceback" in normalized.stack
        assert "bad input" in normalized.stack

    def test_exception_never_raised(self):
        normalized = normalize_error(KeyError("k"))

        assert normalized.stack is None
        assert error_fields(KeyError("k")) == {"name": "KeyError", "message": "'k'"}

    def test_error_like_object(self):
        value = SimpleNamespace(name="FetchError", message="timeout", stack="at fetch()")

        assert normalize_error(value) == StandardError("FetchError", "timeout", "at fetch()")

    def test_error_like_mapping(self):
        value = {"name": "ZodError", "message": "invalid email"}

        assert error_fields(value) == {"name": "ZodError", "message": "invalid email"}

    @pytest.mark.parametrize("value,message", [
        ("plain string", "plain string"),
        (42, "42"),
        (None, "None"),
        ({"name": "no message"}, "{'name': 'no message'}"),
    ])
    def test_unknown_values(self, value, message):
        normalized = normalize_error(value)

        assert normalized == UnknownError(message)
        assert normalized.to_fields() == {"name": "Unknown", "message": message}

    def test_unprintable_value(self):
        assert normalize_error(Unprintable()) == UnknownError("<unprintable Unprintable>")


class TestLogError:
    """Test cases for log_error."""

    def test_emits_error_record(self, make_logger, records):
        log_error(make_logger(), RuntimeError("db down"), query="select 1")

        [record] = records()
        assert record["level"] == "error"
        assert record["msg"] == "Error occurred"
        assert record["query"] == "select 1"
        assert record["error"] == {"name": "RuntimeError", "message": "db down"}

    def test_unknown_value(self, make_logger, records):
        log_error(make_logger(), "string thrown")

        assert records()[0]["error"] == {"name": "Unknown", "message": "string thrown"}

    def test_never_raises(self, build_settings, caplog):
        broken_stream = Mock()
        broken_stream.write.side_effect = OSError("stream closed")
        logger = create_logger(build_settings(), stream=broken_stream)

        with caplog.at_level(logging.WARNING):
            log_error(logger, ValueError("x"))

        assert "Failed to emit error record" in caplog.text

    def test_context_keys_named_like_parameters(self, make_logger, records):
        log_error(make_logger(), KeyError("k"), **{"logger": "db", "error": "shadowed"})

        [record] = records()
        assert record["logger"] == "db"
        assert record["error"]["name"] == "KeyError"
