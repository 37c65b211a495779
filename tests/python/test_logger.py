"""Tests for logging setup."""

from __future__ import annotations

import logging

from apmagent.logger import get_logger, setup_logging


def test_get_logger_is_namespaced():
    assert get_logger("api").name == "apmagent.api"
    assert get_logger("api") is logging.getLogger("apmagent.api")


def test_setup_logging_installs_one_handler():
    root = logging.getLogger("apmagent")
    setup_logging("WARNING")
    count = len(root.handlers)
    setup_logging("DEBUG")
    assert len(root.handlers) == count
    assert root.level == logging.DEBUG
