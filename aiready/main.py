"""main.py

Purpose: FastAPI entry point for the next-ai-ready API

Builds the logging container once, then mounts the API handlers wrapped with
request logging. Run with ``aiready-api`` or
``uvicorn aiready.main:create_app --factory``.
"""

from typing import Optional, TextIO

from dotenv import load_dotenv
from fastapi import FastAPI

from aiready import __version__
from aiready.api import routes
from aiready.api.adapters import api_route
from aiready.config.settings import LoggingSettings, ServerSettings, get_settings
from aiready.container import LoggingContainer


def create_app(settings: Optional[LoggingSettings] = None, *, stream: Optional[TextIO] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        settings: Logging settings; read from the environment when omitted
        stream: Log output stream, standard output by default

    Raises:
        ConfigurationError: If the logging settings are invalid
    """
    settings = settings if settings is not None else get_settings()
    container = LoggingContainer(settings, stream=stream)

    app = FastAPI(title="next-ai-ready API", version=__version__)
    app.state.logging = container

    app.add_api_route(
        "/api/hello",
        api_route(container.with_logging(routes.hello)),
        methods=["GET"],
    )
    app.add_api_route(
        settings.health_check_path,
        api_route(container.with_logging(routes.health)),
        methods=["GET"],
    )

    container.logger.info(
        "Application initialized",
        minLevel=container.logger.config.level_name,
        pretty=container.logger.config.pretty,
    )
    return app


def run() -> None:
    """Console entry point."""
    import uvicorn

    load_dotenv()
    server = ServerSettings()
    uvicorn.run(
        "aiready.main:create_app",
        factory=True,
        host=server.host,
        port=server.port,
        reload=server.reload,
        log_config=None,
    )


if __name__ == "__main__":
    run()
