"""Transactions and the context-local "current transaction" slot."""

from __future__ import annotations

import time
from contextvars import ContextVar
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .agent import Agent

_CURRENT_TRANSACTION: ContextVar[Optional["Transaction"]] = ContextVar(
    "current_transaction", default=None
)


def get_current_transaction() -> Optional["Transaction"]:
    return _CURRENT_TRANSACTION.get()


class Timer:
    def __init__(self) -> None:
        self._start = time.monotonic()
        self._end: Optional[float] = None

    def end(self) -> None:
        if self._end is None:
            self._end = time.monotonic()

    def is_active(self) -> bool:
        return self._end is None

    def get_duration_in_millis(self) -> int:
        """Elapsed milliseconds; keeps growing until :meth:`end` is called."""
        stop = self._end if self._end is not None else time.monotonic()
        return int(round((stop - self._start) * 1000))


class Transaction:
    """One in-flight unit of work, e.g. a single web request.

    Entering the transaction binds it as current for the running context
    (thread or asyncio task); leaving it ends the timer and hands it to the
    owning agent for reporting.
    """

    def __init__(
        self,
        agent: Optional["Agent"] = None,
        url: Optional[str] = None,
        verb: Optional[str] = None,
        queue_time: int = 0,
        timer: Optional[Timer] = None,
    ):
        self.agent = agent
        self.url = url
        self.verb = verb
        self.queue_time = queue_time
        self.timer = timer or Timer()
        self.partial_name: Optional[str] = None
        self.force_ignore: Optional[bool] = None
        self.ignore = False
        self.name: Optional[str] = None
        self._token = None

    def __enter__(self) -> "Transaction":
        self._token = _CURRENT_TRANSACTION.set(self)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.timer.end()
        if self._token:
            _CURRENT_TRANSACTION.reset(self._token)
            self._token = None
        if self.agent is not None:
            self.agent.finish_transaction(self)

    def __repr__(self) -> str:
        return f"<Transaction {self.verb or 'GET'} {self.url!r} name={self.partial_name!r}>"
