"""
Test module for aiready.infrastructure.logging.performance
"""

import pytest

from aiready.infrastructure.logging.performance import (
    PerformanceTimer,
    log_success,
    start_timer,
    timed,
)


class TestPerformanceTimer:
    """Test cases for operation timers."""

    def test_complete_reports_elapsed_time(self, make_logger, records, fake_clock):
        timer = start_timer(make_logger(), "users.select", clock=fake_clock)
        fake_clock.advance(0.25)

        duration = timer.complete(rows=3)

        assert duration == pytest.approx(250.0, abs=0.01)
        [record] = records()
        assert record["duration"] == duration
        assert record["msg"] == "Operation users.select completed"
        assert record["operation"] == "users.select"
        assert record["type"] == "performance"
        assert record["rows"] == 3
        assert record["level"] == "info"

    def test_uncompleted_timer_emits_nothing(self, make_logger, log_stream, fake_clock):
        timer = start_timer(make_logger(), "abandoned", clock=fake_clock)
        fake_clock.advance(5)

        del timer

        assert log_stream.getvalue() == ""

    def test_repeated_complete_emits_again(self, make_logger, records, fake_clock):
        timer = start_timer(make_logger(), "op", clock=fake_clock)
        fake_clock.advance(0.1)
        first = timer.complete()
        fake_clock.advance(0.1)
        second = timer.complete()

        assert second > first
        assert [r["duration"] for r in records()] == [first, second]

    def test_duration_field_cannot_be_overridden(self, make_logger, records, fake_clock):
        timer = start_timer(make_logger(), "op", clock=fake_clock)

        timer.complete(duration=-1, msg="custom")

        [record] = records()
        assert record["duration"] == 0.0
        assert record["msg"] == "Operation op completed"

    def test_complete_accepts_any_field_name(self, make_logger, records, fake_clock):
        timer = start_timer(make_logger(), "op", clock=fake_clock)

        timer.complete(**{"self": "s", "fields": 1})

        [record] = records()
        assert record["self"] == "s"
        assert record["fields"] == 1

    def test_timer_logger_is_a_child(self, make_logger, records):
        parent = make_logger()

        timer = PerformanceTimer(parent, "op")
        parent.info("parent")

        assert "operation" not in records()[0]
        assert timer.logger.context["type"] == "performance"

    def test_default_clock(self, make_logger, records):
        duration = start_timer(make_logger(), "op").complete()

        assert duration >= 0


class TestTimed:
    """Test cases for the timed() context manager."""

    def test_success(self, make_logger, records, fake_clock):
        with timed(make_logger(), "job", fake_clock, batch=7):
            fake_clock.advance(0.002)

        [record] = records()
        assert record["duration"] == pytest.approx(2.0, abs=0.01)
        assert record["batch"] == 7
        assert "status" not in record

    def test_context_keys_named_like_parameters(self, make_logger, records, fake_clock):
        with timed(make_logger(), "job", fake_clock, **{"clock": "wall", "logger": "db"}):
            pass

        [record] = records()
        assert record["clock"] == "wall"
        assert record["logger"] == "db"

    def test_failure_propagates(self, make_logger, records, fake_clock):
        with pytest.raises(KeyError):
            with timed(make_logger(), "job", fake_clock, status="ignored"):
                raise KeyError("missing")

        [record] = records()
        assert record["status"] == "failed"
        assert record["errorName"] == "KeyError"


class TestLogSuccess:

    def test_log_success(self, make_logger, records):
        log_success(make_logger(), "user.create", userId="u1")

        [record] = records()
        assert record["operation"] == "user.create"
        assert record["status"] == "success"
        assert record["userId"] == "u1"

    def test_context_keys_named_like_parameters(self, make_logger, records):
        log_success(make_logger(), "user.create", **{"logger": "auth", "operation": "shadow"})

        [record] = records()
        assert record["logger"] == "auth"
        assert record["operation"] == "user.create"
