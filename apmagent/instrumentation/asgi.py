"""ASGI middleware that runs every HTTP request inside a transaction."""

from __future__ import annotations

__all__ = ["TransactionMiddleware", "parse_queue_start"]

import time
from typing import Any, Awaitable, Callable, Dict, MutableMapping, Optional

from apmagent.agent import Agent
from apmagent.logger import get_logger

logger = get_logger("instrumentation.asgi")

Scope = MutableMapping[str, Any]
Receive = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send = Callable[[MutableMapping[str, Any]], Awaitable[None]]
ASGIApp = Callable[[Scope, Receive, Send], Awaitable[None]]

_QUEUE_HEADERS = ("x-request-start", "x-queue-start")


def parse_queue_start(value: Optional[str]) -> Optional[float]:
    """Parse a proxy's ``X-Request-Start`` value into epoch seconds.

    Accepts an optional ``t=`` prefix and seconds, milliseconds or
    microseconds, told apart by magnitude.
    """
    if not value:
        return None
    raw = value.strip()
    if raw.startswith("t="):
        raw = raw[2:]
    try:
        stamp = float(raw)
    except ValueError:
        return None
    if stamp > 1e15:
        return stamp / 1_000_000
    if stamp > 1e12:
        return stamp / 1_000
    return stamp


def _headers(scope: Scope) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for key, val in scope.get("headers") or []:
        out[key.decode("latin-1").lower()] = val.decode("latin-1")
    return out


def _queue_time(headers: Dict[str, str], now: float) -> int:
    for name in _QUEUE_HEADERS:
        start = parse_queue_start(headers.get(name))
        if start is not None:
            return max(int(round((now - start) * 1000)), 0)
    return 0


class TransactionMiddleware:
    def __init__(self, app: ASGIApp, agent: Agent):
        self.app = app
        self.agent = agent

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        url = scope.get("path") or "/"
        query = scope.get("query_string") or b""
        if query:
            url = f"{url}?{query.decode('latin-1')}"

        queue_time = _queue_time(_headers(scope), time.time())
        with self.agent.start_transaction(url=url, verb=scope.get("method"), queue_time=queue_time) as transaction:
            try:
                await self.app(scope, receive, send)
            except Exception as exc:
                logger.debug("Uncaught exception in %r", transaction)
                self.agent.report_error(transaction, exc)
                raise
