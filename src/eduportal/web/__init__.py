"""Web layer: FastAPI app, routes, schemas and request context."""
