"""Framework integrations."""

from .asgi import TransactionMiddleware

__all__ = ["TransactionMiddleware"]
