"""FastAPI application assembly: factory, lifespan, middleware, handlers."""
