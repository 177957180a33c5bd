"""Infrastructure adapters: database, broadcasting and observability."""
