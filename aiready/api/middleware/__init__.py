from .logging import (
    ApiRequest,
    ApiResponse,
    LoggedRequest,
    LoggingResponse,
    generate_request_id,
    log_api_error,
    log_api_success,
    with_logging,
)

__all__ = [
    "ApiRequest",
    "ApiResponse",
    "LoggedRequest",
    "LoggingResponse",
    "generate_request_id",
    "log_api_error",
    "log_api_success",
    "with_logging",
]
