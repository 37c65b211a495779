"""Configuration helpers for the agent."""

from __future__ import annotations

__all__ = [
    "AgentConfig",
    "BrowserMonitoringConfig",
    "load_config",
    "get_log_level",
    "get_max_field_len",
    "get_max_traced_errors",
    "get_max_transactions",
]

import os
from dataclasses import dataclass, field
from typing import Optional


def _parse_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_int(raw: str | None, default: int, minimum: int) -> int:
    if not raw:
        return default
    try:
        val = int(raw)
    except ValueError:
        return default
    return max(val, minimum)


def _get_str(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class BrowserMonitoringConfig:
    enable: bool = True
    browser_key: Optional[str] = None
    js_agent_file: Optional[str] = None
    js_agent_loader: Optional[str] = None
    beacon: Optional[str] = None
    error_beacon: Optional[str] = None
    debug: bool = False


@dataclass(frozen=True)
class AgentConfig:
    license_key: str = ""
    application_id: Optional[str] = None
    browser_monitoring: Optional[BrowserMonitoringConfig] = field(default_factory=BrowserMonitoringConfig)


def get_log_level() -> str:
    return (_get_str("APMAGENT_LOG_LEVEL") or "INFO").upper()


def get_max_field_len() -> int:
    return _parse_int(os.getenv("APMAGENT_MAX_FIELD_LEN"), default=512, minimum=64)


def get_max_traced_errors() -> int:
    return _parse_int(os.getenv("APMAGENT_MAX_TRACED_ERRORS"), default=20, minimum=1)


def get_max_transactions() -> int:
    return _parse_int(os.getenv("APMAGENT_MAX_TRANSACTIONS"), default=1000, minimum=1)


def _load_browser_monitoring() -> Optional[BrowserMonitoringConfig]:
    if not _parse_bool(os.getenv("APMAGENT_BROWSER_MONITORING"), default=True):
        return None
    return BrowserMonitoringConfig(
        enable=_parse_bool(os.getenv("APMAGENT_BROWSER_MONITORING_ENABLE"), default=True),
        browser_key=_get_str("APMAGENT_BROWSER_KEY"),
        js_agent_file=_get_str("APMAGENT_JS_AGENT_FILE"),
        js_agent_loader=_get_str("APMAGENT_JS_AGENT_LOADER"),
        beacon=_get_str("APMAGENT_BEACON"),
        error_beacon=_get_str("APMAGENT_ERROR_BEACON"),
        debug=_parse_bool(os.getenv("APMAGENT_BROWSER_MONITORING_DEBUG"), default=False),
    )


def load_config() -> AgentConfig:
    """Build an immutable configuration snapshot from ``APMAGENT_*`` variables."""
    return AgentConfig(
        license_key=_get_str("APMAGENT_LICENSE_KEY") or "",
        application_id=_get_str("APMAGENT_APPLICATION_ID"),
        browser_monitoring=_load_browser_monitoring(),
    )
