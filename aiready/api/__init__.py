"""API layer: handler adapters, routes and request-logging middleware."""
