"""people-service: person registry with cursor pagination and a Redis record cache."""

__version__ = "0.1.0"
