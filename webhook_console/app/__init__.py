"""FastAPI application: factory, middleware, exception handlers and routing."""
