"""apmagent public API."""

from .agent import Agent, AgentHandle
from .api import InstrumentationAPI
from .config import AgentConfig, BrowserMonitoringConfig, load_config
from .transaction import Transaction, get_current_transaction

__all__ = [
    "Agent",
    "AgentHandle",
    "AgentConfig",
    "BrowserMonitoringConfig",
    "InstrumentationAPI",
    "Transaction",
    "get_current_transaction",
    "load_config",
]
