"""
Test module for aiready.infrastructure.logging.levels
"""

import pytest

from aiready.infrastructure.logging.levels import (
    LOG_LEVELS,
    SILENT,
    LogLevel,
    is_enabled,
    parse_level,
)


class TestLogLevel:
    """Test cases for the level registry."""

    def test_weights(self):
        assert LOG_LEVELS == {
            "trace": 10,
            "debug": 20,
            "info": 30,
            "warn": 40,
            "error": 50,
            "fatal": 60,
        }

    def test_total_order(self):
        ordered = sorted(LogLevel)
        assert ordered == [
            LogLevel.TRACE,
            LogLevel.DEBUG,
            LogLevel.INFO,
            LogLevel.WARN,
            LogLevel.ERROR,
            LogLevel.FATAL,
        ]
        assert LogLevel.FATAL > LogLevel.ERROR > LogLevel.TRACE

    def test_label(self):
        assert LogLevel.WARN.label == "warn"

    def test_silent_above_fatal(self):
        assert SILENT > LogLevel.FATAL
        assert not is_enabled(LogLevel.FATAL, SILENT)

    @pytest.mark.parametrize("name,expected", [
        ("info", LogLevel.INFO),
        ("WARN", LogLevel.WARN),
        (" trace ", LogLevel.TRACE),
    ])
    def test_parse_level(self, name, expected):
        assert parse_level(name) is expected

    @pytest.mark.parametrize("name", ["warning", "silent", "", None, 30])
    def test_parse_level_unknown(self, name):
        assert parse_level(name) is None

    def test_is_enabled(self):
        assert is_enabled(LogLevel.INFO, LogLevel.INFO)
        assert is_enabled(LogLevel.ERROR, LogLevel.INFO)
        assert not is_enabled(LogLevel.DEBUG, LogLevel.INFO)


class TestThresholdFiltering:
    """Records at or above the configured minimum are emitted, others are not."""

    @pytest.mark.parametrize("minimum", list(LogLevel))
    def test_threshold(self, make_logger, records, minimum):
        logger = make_logger(log_level=minimum.label)

        for level in LogLevel:
            logger.log(level, {"weight": int(level)})

        emitted = [record["weight"] for record in records()]
        assert emitted == [int(level) for level in LogLevel if level >= minimum]
