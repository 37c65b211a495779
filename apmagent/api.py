"""The public API applications call to influence how transactions are reported.

Nothing here raises to the caller: a missing transaction or a bad argument is
logged and the call becomes a no-op.
"""

from __future__ import annotations

__all__ = ["InstrumentationAPI"]

from typing import Any, Optional

from . import names
from .agent import AgentHandle, RulePattern
from .browser import BrowserTimingIssue, build_rum_hash, render_header
from .logger import get_logger

logger = get_logger("api")


class InstrumentationAPI:
    """Calls an application makes to name, ignore and annotate its transactions."""

    def __init__(self, agent: AgentHandle):
        self.agent = agent

    def set_transaction_name(self, name: Optional[str]) -> None:
        """Give the current transaction a custom name, prefixed with ``Custom/``.

        Overrides any naming rules. Must be called while a transaction is
        active, e.g. from inside a request handler.
        """
        transaction = self.agent.current_transaction()
        if transaction is None:
            logger.warning("No transaction found when setting name to '%s'.", name)
            return

        if not name:
            if transaction.url:
                logger.error("Must include name in set_transaction_name call for URL %s.", transaction.url)
            else:
                logger.error("Must include name in set_transaction_name call.")
            return

        transaction.partial_name = f"{names.CUSTOM}/{name}"

    def set_controller_name(self, name: Optional[str], action: Optional[str] = None) -> None:
        """Name the current transaction after a controller and action.

        The action defaults to the request's HTTP method, then to ``GET``.
        """
        transaction = self.agent.current_transaction()
        if transaction is None:
            logger.warning("No transaction found when setting controller to %s.", name)
            return

        if not name:
            if transaction.url:
                logger.error("Must include name in set_controller_name call for URL %s.", transaction.url)
            else:
                logger.error("Must include name in set_controller_name call.")
            return

        action = action or transaction.verb or "GET"
        transaction.partial_name = f"{names.CONTROLLER}/{name}/{action}"

    def set_ignore_transaction(self, ignored: bool) -> None:
        """Ignore, or force reporting of, the current transaction.

        Takes precedence over ignoring rules in either direction.
        """
        transaction = self.agent.current_transaction()
        if transaction is None:
            logger.warning("No transaction found to ignore.")
            return

        transaction.force_ignore = ignored

    def notice_error(self, error: Any) -> None:
        """Report an error the application already handled.

        Exceptions are preferred, but strings and objects with a ``message``
        or ``stack`` are accepted too. Works outside a transaction.
        """
        transaction = self.agent.current_transaction()
        self.agent.report_error(transaction, error)

    def add_naming_rule(self, pattern: RulePattern, name: Optional[str]) -> None:
        """Name transactions whose URL matches ``pattern``.

        ``$1``, ``$2``... in ``name`` are replaced with the pattern's capture
        groups. Keep those low-cardinality: identifiers or timestamps in a
        name produce one metric each. Rules cannot be removed once added.
        """
        if not name:
            logger.error("Simple naming rules require a replacement name.")
            return

        if not pattern:
            logger.error("Simple naming rules require a URL pattern.")
            return

        self.agent.register_naming_rule(pattern, "/" + name)

    def add_ignoring_rule(self, pattern: Optional[RulePattern]) -> None:
        """Ignore transactions whose URL matches ``pattern``, e.g. ``^/socket\\.io/``."""
        if not pattern:
            logger.error("Must include a URL pattern to ignore.")
            return

        self.agent.register_ignore_rule(pattern)

    def get_browser_timing_header(self) -> str:
        """Return the ``<script>`` header for browser monitoring.

        Call it during the transaction, once per page: the header carries the
        transaction's elapsed time and must not be shared between requests.
        When the header cannot be built an inert HTML comment is returned.
        """
        conf = self.agent.configuration()

        browser_monitoring = conf.browser_monitoring
        if browser_monitoring is None:
            return _gracefail(BrowserTimingIssue.NO_CONFIG)

        if not browser_monitoring.enable:
            return _gracefail(BrowserTimingIssue.DISABLED)

        transaction = self.agent.current_transaction()
        if transaction is None:
            return _gracefail(BrowserTimingIssue.NO_TRANSACTION)

        if not transaction.partial_name:
            return _gracefail(BrowserTimingIssue.NO_NAME)

        # only set once the agent has connected
        if not conf.application_id:
            return _gracefail(BrowserTimingIssue.NO_APPLICATION_ID)

        if not browser_monitoring.browser_key:
            return _gracefail(BrowserTimingIssue.NO_BROWSER_KEY)

        rum_hash = build_rum_hash(
            browser_monitoring,
            transaction,
            application_id=conf.application_id,
            license_key=conf.license_key,
        )
        out = render_header(rum_hash, browser_monitoring.js_agent_loader, debug=browser_monitoring.debug)
        logger.debug("generating RUM header %s", out)
        return out


def _gracefail(issue: BrowserTimingIssue) -> str:
    logger.warning(issue.message)
    return issue.comment()
