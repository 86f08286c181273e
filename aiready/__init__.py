"""aiready: structured logging and request observability for the next-ai-ready service."""

__version__ = "0.1.0"
