"""FastAPI integration."""

from __future__ import annotations

__all__ = ["instrument_app"]

from fastapi import FastAPI

from apmagent.agent import Agent
from apmagent.api import InstrumentationAPI

from .asgi import TransactionMiddleware


def instrument_app(app: FastAPI, agent: Agent) -> InstrumentationAPI:
    """Wrap every request to ``app`` in a transaction.

    The returned API is also stored as ``app.state.apmagent`` so handlers can
    reach it through ``request.app``.
    """
    app.add_middleware(TransactionMiddleware, agent=agent)
    api = InstrumentationAPI(agent)
    app.state.apmagent = api
    return api
