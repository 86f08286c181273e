"""
Starlette adapters for ``(request, response)`` API handlers.

``api_route`` lets a handler written against ApiRequest/ApiResponse (and
wrapped with ``with_logging``) be mounted as a FastAPI/Starlette endpoint.
"""

import json
from typing import Any, Dict, Mapping, Optional

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from aiready.api.middleware.logging import Handler, call_handler


def _decode_body(raw: bytes, content_type: Optional[str]) -> Any:
    if not raw:
        return None
    text = raw.decode("utf-8", errors="replace")
    if content_type and "json" in content_type.lower():
        try:
            return json.loads(text)
        except ValueError:
            return text
    return text


class StarletteApiRequest:
    """ApiRequest over a Starlette request, with the body read up front."""

    def __init__(
        self,
        method: str,
        url: str,
        query: Mapping[str, Any],
        headers: Mapping[str, Any],
        body: Any = None,
    ):
        self.method = method
        self.url = url
        self.query = query
        self.headers = headers
        self.body = body

    @classmethod
    async def from_request(cls, request: Request) -> "StarletteApiRequest":
        raw = await request.body()
        url = request.url.path
        if request.url.query:
            url = f"{url}?{request.url.query}"
        return cls(
            method=request.method,
            url=url,
            query=dict(request.query_params),
            headers=request.headers,
            body=_decode_body(raw, request.headers.get("content-type")),
        )


class StarletteResponseWriter:
    """ApiResponse that materializes a Starlette Response."""

    def __init__(self) -> None:
        self.status_code = 200
        self.headers: Dict[str, str] = {}
        self.response: Optional[Response] = None

    def status(self, code: int) -> "StarletteResponseWriter":
        self.status_code = code
        return self

    def set_header(self, name: str, value: str) -> "StarletteResponseWriter":
        self.headers[name] = value
        return self

    def send_json(self, body: Any) -> Response:
        self.response = JSONResponse(body, status_code=self.status_code, headers=self.headers)
        return self.response

    def send_raw(self, body: Any) -> Response:
        if isinstance(body, (dict, list)):
            return self.send_json(body)
        self.response = Response(
            content=body if body is not None else b"",
            status_code=self.status_code,
            headers=self.headers,
        )
        return self.response

    def end(self, body: Any = None) -> Response:
        self.response = Response(
            content=body if body is not None else b"",
            status_code=self.status_code,
            headers=self.headers,
        )
        return self.response

    @property
    def finished(self) -> bool:
        return self.response is not None

    def to_response(self) -> Response:
        if self.response is None:
            return Response(status_code=self.status_code, headers=self.headers)
        return self.response


def api_route(handler: Handler):
    """
    Build a Starlette endpoint from a ``(request, response)`` handler.

    Example:
        >>> app.add_api_route("/api/hello", api_route(with_logging(hello, logger)), methods=["GET"])
    """

    async def endpoint(request: Request) -> Response:
        api_request = await StarletteApiRequest.from_request(request)
        writer = StarletteResponseWriter()
        await call_handler(handler, api_request, writer)
        return writer.to_response()

    endpoint.__name__ = getattr(handler, "__name__", "endpoint")
    return endpoint
