"""CQRS and event sourcing building blocks: events, an in-memory store, matchers, middleware and WSGI apps."""

__version__ = "0.1.0"