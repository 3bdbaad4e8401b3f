"""ASGI integration for request metrics."""
