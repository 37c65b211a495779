"""The agent handle consumed by the public API."""

from __future__ import annotations

__all__ = ["AgentHandle", "Agent"]

from typing import Any, List, Optional, Pattern, Protocol, Union

from . import names
from .config import AgentConfig, get_max_transactions, load_config
from .errors import ErrorCollector
from .logger import get_logger
from .normalizer import RuleNormalizer
from .redaction import Redactor, load_redaction_config
from .transaction import Transaction, get_current_transaction

logger = get_logger("agent")

RulePattern = Union[str, Pattern[str]]


class AgentHandle(Protocol):
    def current_transaction(self) -> Optional[Transaction]: ...

    def register_naming_rule(self, pattern: RulePattern, replacement: str) -> None: ...

    def register_ignore_rule(self, pattern: RulePattern) -> None: ...

    def report_error(self, transaction: Optional[Transaction], error: Any) -> None: ...

    def configuration(self) -> AgentConfig: ...


class Agent:
    """In-process agent: owns the config snapshot, user rules and error collector."""

    def __init__(self, config: Optional[AgentConfig] = None, max_transactions: Optional[int] = None):
        self.config = config or load_config()
        self.user_normalizer = RuleNormalizer()
        redactor = Redactor(load_redaction_config(secrets=[self.config.license_key]))
        self.errors = ErrorCollector(redactor=redactor)
        self.max_transactions = max_transactions or get_max_transactions()
        self.transactions: List[str] = []
        self.dropped_transactions = 0

    def current_transaction(self) -> Optional[Transaction]:
        return get_current_transaction()

    def register_naming_rule(self, pattern: RulePattern, replacement: str) -> None:
        self.user_normalizer.add_simple(pattern, replacement)

    def register_ignore_rule(self, pattern: RulePattern) -> None:
        self.user_normalizer.add_simple(pattern, None)

    def report_error(self, transaction: Optional[Transaction], error: Any) -> None:
        self.errors.add(transaction, error)

    def configuration(self) -> AgentConfig:
        return self.config

    def start_transaction(
        self,
        url: Optional[str] = None,
        verb: Optional[str] = None,
        queue_time: int = 0,
    ) -> Transaction:
        return Transaction(agent=self, url=url, verb=verb, queue_time=queue_time)

    def finish_transaction(self, transaction: Transaction) -> Optional[str]:
        """Finalize the transaction name and decide whether it is reported.

        ``force_ignore`` wins over whatever the rules decided, in both directions.
        """
        path = (transaction.url or "").split("?", 1)[0]
        result = self.user_normalizer.normalize(path) if path else None

        if transaction.partial_name:
            name = transaction.partial_name
        elif result is not None and result.matched:
            name = names.NORMALIZED + result.name
        else:
            name = names.URI + (path or "/*")

        ignore = bool(result and result.ignore)
        if transaction.force_ignore is not None:
            ignore = bool(transaction.force_ignore)

        transaction.name = "WebTransaction/" + name
        transaction.ignore = ignore
        if ignore:
            logger.debug("Ignoring transaction %s.", transaction.name)
            return None

        if len(self.transactions) >= self.max_transactions:
            self.dropped_transactions += 1
            logger.debug("Transaction limit of %d reached, dropping %s.", self.max_transactions, transaction.name)
        else:
            self.transactions.append(transaction.name)
        return transaction.name

    def harvest(self) -> List[str]:
        """Return the recorded transaction names and start a fresh batch."""
        recorded, self.transactions = self.transactions, []
        self.dropped_transactions = 0
        return recorded
