"""
Request-logging middleware for aiready API handlers.

Wraps a ``(request, response)`` handler so that every request produces:

- one "Incoming request" record when it arrives
- one "Request completed" record when the handler writes its response
  (status code, duration, and the response body for status >= 400)
- one "Request failed" record when the handler raises; the exception is
  re-raised unchanged

Completion is observed through LoggingResponse, a decorator around the
response object. Each of its three emitting methods (``send_json``,
``send_raw``, ``end``) runs the completion hook and then delegates to the
wrapped response. A handler that calls more than one emitting method gets one
completion record per call.

Requests to the health-check path skip logging entirely.
"""

import functools
import inspect
import logging
import time
import uuid
from typing import Any, Awaitable, Callable, Mapping, Optional, Protocol, Union
from urllib.parse import urlsplit

from aiready.config.settings import DEFAULT_HEALTH_CHECK_PATH
from aiready.infrastructure.logging.config import Logger
from aiready.infrastructure.logging.context import create_request_logger
from aiready.infrastructure.logging.errors import error_fields

_internal_logger = logging.getLogger(__name__)


class ApiRequest(Protocol):
    """Inbound request as seen by API handlers."""
    method: str
    url: str
    query: Mapping[str, Any]
    headers: Mapping[str, Any]
    body: Any


class ApiResponse(Protocol):
    """Outbound response with its three emitting operations."""
    status_code: int

    def status(self, code: int) -> "ApiResponse": ...

    def send_json(self, body: Any) -> Any: ...

    def send_raw(self, body: Any) -> Any: ...

    def end(self, body: Any = None) -> Any: ...


Handler = Callable[[Any, Any], Union[Any, Awaitable[Any]]]
CompletionHook = Callable[[int, Any], None]


def generate_request_id() -> str:
    """Request identifier: epoch milliseconds plus a random suffix."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


async def call_handler(handler: Handler, request: Any, response: Any) -> Any:
    """Invoke a sync or async handler."""
    result = handler(request, response)
    if inspect.isawaitable(result):
        result = await result
    return result


def _elapsed_ms(clock: Callable[[], float], start_time: float) -> float:
    return round((clock() - start_time) * 1000, 3)


class LoggedRequest:
    """
    The inbound request plus its logging context.

    Attributes:
        id: Request identifier
        start_time: Clock reading when the request arrived, in seconds
        logger: Request-scoped logger
    """

    def __init__(self, request: ApiRequest, request_id: str, start_time: float, logger: Logger):
        self._request = request
        self.id = request_id
        self.start_time = start_time
        self.logger = logger

    @property
    def raw(self) -> ApiRequest:
        return self._request

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        # method, url, query, headers, body and anything adapter-specific
        return getattr(self._request, name)


class LoggingResponse:
    """Response decorator that reports completion before each emitting call."""

    def __init__(self, response: ApiResponse, on_complete: CompletionHook):
        self._response = response
        self._on_complete = on_complete

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @status_code.setter
    def status_code(self, code: int) -> None:
        self._response.status_code = code

    def status(self, code: int) -> "LoggingResponse":
        self._response.status(code)
        return self

    def send_json(self, body: Any) -> Any:
        self._on_complete(self.status_code, body)
        return self._response.send_json(body)

    def send_raw(self, body: Any) -> Any:
        self._on_complete(self.status_code, body)
        return self._response.send_raw(body)

    def end(self, body: Any = None) -> Any:
        self._on_complete(self.status_code, None)
        return self._response.end(body)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._response, name)


def is_health_check(request: Any, health_check_path: str) -> bool:
    url = getattr(request, "url", None) or ""
    return urlsplit(str(url)).path == health_check_path


def with_logging(
    handler: Handler,
    logger: Logger,
    *,
    health_check_path: str = DEFAULT_HEALTH_CHECK_PATH,
    clock: Callable[[], float] = time.monotonic,
) -> Callable[[Any, Any], Awaitable[Any]]:
    """
    Wrap an API handler with request logging.

    Args:
        handler: ``(request, response)`` callable, sync or async
        logger: Core (or component) logger the request logger derives from
        health_check_path: Path that bypasses logging
        clock: Monotonic clock in seconds, used for durations

    Returns:
        Async handler with the same calling convention. The wrapped handler
        receives a LoggedRequest and a LoggingResponse.
    """

    @functools.wraps(handler)
    async def logged_handler(request: ApiRequest, response: ApiResponse) -> Any:
        if is_health_check(request, health_check_path):
            return await call_handler(handler, request, response)

        request_id = generate_request_id()
        start_time = clock()
        request_logger = create_request_logger(logger, request)
        method = request.method

        request_logger.info(
            "Incoming request",
            requestId=request_id,
            method=method,
            url=request.url,
            query=dict(request.query or {}),
            body=request.body if (method or "").upper() != "GET" else None,
        )

        def on_complete(status_code: int, body: Any = None) -> None:
            try:
                request_logger.info(
                    "Request completed",
                    requestId=request_id,
                    statusCode=status_code,
                    duration=_elapsed_ms(clock, start_time),
                    responseBody=body if status_code >= 400 else None,
                )
            except Exception:
                _internal_logger.warning("Failed to log request completion", exc_info=True)

        logged_request = LoggedRequest(request, request_id, start_time, request_logger)
        logged_response = LoggingResponse(response, on_complete)

        try:
            return await call_handler(handler, logged_request, logged_response)
        except BaseException as error:
            request_logger.error(
                "Request failed",
                requestId=request_id,
                duration=_elapsed_ms(clock, start_time),
                error=error_fields(error),
            )
            raise

    return logged_handler


def _request_logger(request: Any, logger: Optional[Logger]) -> Logger:
    if isinstance(request, LoggedRequest):
        return request.logger
    if logger is None:
        raise TypeError("logger is required for requests not wrapped by with_logging")
    return create_request_logger(logger, request)


def log_api_error(request: Any, error: Any, logger: Optional[Logger] = None, /, **context: Any) -> None:
    """Record a handled API error for the current request."""
    _request_logger(request, logger).error(**{
        "requestId": getattr(request, "id", None),
        "method": request.method,
        "url": request.url,
        "error": error_fields(error),
        **context,
        "msg": "API error",
    })


def log_api_success(request: Any, operation: str, logger: Optional[Logger] = None, /, **context: Any) -> None:
    """
    Record a named successful operation for the current request.

    Example:
        >>> log_api_success(request, "hello.fetch", name=name)
    """
    _request_logger(request, logger).info(**{
        "requestId": getattr(request, "id", None),
        "method": request.method,
        "url": request.url,
        "operation": operation,
        **context,
        "msg": "API operation successful",
    })
