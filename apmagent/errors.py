"""Collects errors noticed by the application or raised inside transactions."""

from __future__ import annotations

__all__ = ["ErrorCollector", "TracedError"]

import time
import traceback
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, List, Optional

from .config import get_max_traced_errors
from .logger import get_logger
from .redaction import Redactor
from .transaction import Transaction

logger = get_logger("errors")


@dataclass
class TracedError:
    timestamp: float
    transaction_name: Optional[str]
    type: str
    message: str
    stack: Optional[str] = None


def _describe(error: Any) -> tuple[str, str, Optional[str]]:
    """Return ``(type, message, stack)`` for whatever the application handed us."""
    if isinstance(error, BaseException):
        stack = None
        if error.__traceback__ is not None:
            stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        return type(error).__name__, str(error), stack
    if isinstance(error, str):
        return "Error", error, None
    if isinstance(error, Mapping):
        err_type = "Error"
        message = error.get("message")
        stack = error.get("stack")
    else:
        err_type = type(error).__name__
        message = getattr(error, "message", None)
        stack = getattr(error, "stack", None)
    if message is None and stack is None:
        return err_type, repr(error), None
    return (
        err_type,
        str(message) if message is not None else "",
        str(stack) if stack is not None else None,
    )


class ErrorCollector:
    def __init__(self, redactor: Optional[Redactor] = None, max_errors: Optional[int] = None) -> None:
        self._redactor = redactor or Redactor()
        self.max_errors = max_errors or get_max_traced_errors()
        self.errors: List[TracedError] = []
        self.dropped = 0

    def add(self, transaction: Optional[Transaction], error: Any) -> Optional[TracedError]:
        if len(self.errors) >= self.max_errors:
            self.dropped += 1
            logger.debug("Error limit of %d reached, dropping error.", self.max_errors)
            return None

        err_type, message, stack = _describe(error)
        transaction_name = None
        if transaction is not None:
            transaction_name = transaction.partial_name or transaction.url

        traced = TracedError(
            timestamp=time.time(),
            transaction_name=transaction_name,
            type=err_type,
            message=self._redactor.redact(message) or "",
            stack=self._redactor.scrub(stack),
        )
        self.errors.append(traced)
        return traced

    def clear(self) -> List[TracedError]:
        errors, self.errors = self.errors, []
        self.dropped = 0
        return errors
