"""
Performance timing for individual operations.

A timer captures its start time on creation and emits a single ``info``
record each time ``complete`` is called. A timer that is never completed
emits nothing.
"""

import time
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

from aiready.infrastructure.logging.config import Logger
from aiready.infrastructure.logging.context import child

Clock = Callable[[], float]


class PerformanceTimer:
    """
    Handle for one timed operation.

    Attributes:
        operation: Operation name used in the completion message
        start_time: Clock reading at creation, in seconds
        logger: Child logger tagged ``{operation, type: "performance"}``
    """

    def __init__(self, logger: Logger, operation: str, clock: Clock = time.monotonic):
        self.operation = operation
        self.logger = child(logger, operation=operation, type="performance")
        self._clock = clock
        self.start_time = clock()

    def elapsed(self) -> float:
        """Milliseconds since the timer started."""
        return round((self._clock() - self.start_time) * 1000, 3)

    def complete(self, /, **fields: Any) -> float:
        """
        Emit the completion record and return the duration in milliseconds.

        Every call emits a record; callers complete a timer once per logical
        operation.
        """
        duration = self.elapsed()
        self.logger.info(**{
            **fields,
            "duration": duration,
            "msg": f"Operation {self.operation} completed",
        })
        return duration


def start_timer(logger: Logger, operation: str, clock: Optional[Clock] = None) -> PerformanceTimer:
    return PerformanceTimer(logger, operation, clock or time.monotonic)


@contextmanager
def timed(logger: Logger, operation: str, clock: Optional[Clock] = None, /, **fields: Any) -> Iterator[PerformanceTimer]:
    """
    Time a block and complete the timer when it exits.

    When the block raises, the record carries ``status="failed"`` and the
    error class name, and the exception propagates.

    Example:
        >>> with timed(db_logger, "users.select", table="users"):
        ...     rows = session.execute(query)
    """
    timer = start_timer(logger, operation, clock)
    try:
        yield timer
    except Exception as error:
        timer.complete(**{**fields, "status": "failed", "errorName": type(error).__name__})
        raise
    timer.complete(**fields)


def log_success(logger: Logger, operation: str, /, **context: Any) -> None:
    """Record a successful named operation."""
    logger.info(**{**context, "operation": operation, "status": "success"})
