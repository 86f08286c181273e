"""
API route handlers.

Handlers follow the ``(request, response)`` convention and are mounted
through ``with_logging`` and ``api_route`` in ``aiready.main``.
"""

from datetime import datetime, timezone

from aiready.api.middleware.logging import log_api_success

DEFAULT_NAME = "John Doe"


async def hello(request, response):
    """Greet ``?name=`` (or a default name) and record the lookup."""
    request.logger.debug("Processing hello request", query=dict(request.query))

    name = request.query.get("name") or DEFAULT_NAME

    log_api_success(request, "hello.fetch", name=name)

    response.status(200).send_json({
        "name": name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "message": f"Hello, {name}!",
    })


def health(request, response):
    response.status(200).send_json({"status": "ok"})
