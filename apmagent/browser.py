"""Browser (RUM) timing header generation.

The header is parsed by a separately shipped browser script, so the markup,
JSON field names and the obfuscation scheme must stay byte-compatible.
"""

from __future__ import annotations

__all__ = [
    "BrowserTimingIssue",
    "RUM_STUB",
    "build_rum_hash",
    "deobfuscate",
    "obfuscate",
    "render_header",
]

import base64
import json
from enum import IntEnum
from typing import Any, Dict

from .config import BrowserMonitoringConfig
from .transaction import Transaction

RUM_STUB = (
    "<script type='text/javascript'>window.NREUM||(NREUM={});"
    "NREUM.info = %s; %s</script>"
)

# The browser-side decoder only ever cycles over this many key characters.
_KEY_CYCLE = 13


class BrowserTimingIssue(IntEnum):
    DISABLED = 0
    NO_TRANSACTION = 1
    NO_CONFIG = 2
    NO_NAME = 3
    NO_APPLICATION_ID = 4
    NO_BROWSER_KEY = 5

    @property
    def message(self) -> str:
        return _ISSUE_MESSAGES[self]

    def comment(self) -> str:
        return f"<!-- NREUM: ({int(self)}) -->"


_ISSUE_MESSAGES = {
    BrowserTimingIssue.DISABLED: "NREUM: no browser monitoring headers generated; disabled",
    BrowserTimingIssue.NO_TRANSACTION: "NREUM: transaction missing while generating browser monitoring headers",
    BrowserTimingIssue.NO_CONFIG: "NREUM: conf.browser_monitoring missing, something is probably wrong",
    BrowserTimingIssue.NO_NAME: "NREUM: browser_monitoring headers need a transaction name",
    BrowserTimingIssue.NO_APPLICATION_ID: "NREUM: browser_monitoring requires valid application_id",
    BrowserTimingIssue.NO_BROWSER_KEY: "NREUM: browser_monitoring requires valid browser_key",
}


def _xor(data: bytes, key: str) -> bytes:
    if not key:
        return data
    cycle = key[:_KEY_CYCLE]
    # only the low byte of each key character is used
    return bytes((b ^ ord(cycle[i % _KEY_CYCLE % len(cycle)])) & 0xFF for i, b in enumerate(data))


def obfuscate(text: str, key: str) -> str:
    """XOR the UTF-8 bytes of ``text`` with ``key[i % 13]`` and base64 the result.

    This only keeps the name from being read casually in page source.
    """
    return base64.b64encode(_xor(text.encode("utf-8"), key)).decode("ascii")


def deobfuscate(encoded: str, key: str) -> str:
    return _xor(base64.b64decode(encoded, validate=True), key).decode("utf-8")


def build_rum_hash(
    browser_monitoring: BrowserMonitoringConfig,
    transaction: Transaction,
    application_id: str,
    license_key: str,
) -> Dict[str, Any]:
    """The record written into the page as ``NREUM.info``.

    Unset agent/beacon settings are left out rather than written as null.
    """
    rum_hash: Dict[str, Any] = {
        "agent": browser_monitoring.js_agent_file,
        "beacon": browser_monitoring.beacon,
        "errorBeacon": browser_monitoring.error_beacon,
        "licenseKey": browser_monitoring.browser_key,
        "applicationID": application_id,
        "applicationTime": transaction.timer.get_duration_in_millis(),
        "transactionName": obfuscate(transaction.partial_name or "", license_key),
        "queueTime": transaction.queue_time,
    }
    rum_hash = {key: value for key, value in rum_hash.items() if value is not None}

    # not used yet
    rum_hash["agentToken"] = None
    rum_hash["ttGuid"] = ""
    return rum_hash


def render_header(rum_hash: Dict[str, Any], loader: str | None, debug: bool = False) -> str:
    if debug:
        blob = json.dumps(rum_hash, indent=2, ensure_ascii=False)
    else:
        blob = json.dumps(rum_hash, separators=(",", ":"), ensure_ascii=False)
    return RUM_STUB % (blob, loader or "")
