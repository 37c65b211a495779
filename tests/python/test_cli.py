"""Tests for CLI commands."""

from __future__ import annotations

import json
import subprocess
import sys

from apmagent.browser import obfuscate


def _run_cli(*args: str, license_key: str = "0123456789ABC") -> subprocess.CompletedProcess:
    env = {"APMAGENT_LICENSE_KEY": license_key, "PATH": "", "SYSTEMROOT": "C:\\Windows"}
    return subprocess.run(
        [sys.executable, "-m", "apmagent.cli"] + list(args),
        capture_output=True, text=True, env=env, timeout=10,
    )


def test_cli_obfuscate_uses_configured_key():
    result = _run_cli("obfuscate", "Custom/Foo")
    assert result.returncode == 0
    assert result.stdout.strip() == obfuscate("Custom/Foo", "0123456789ABC")


def test_cli_deobfuscate_round_trip():
    encoded = obfuscate("Controller/Users/GET", "otherkey")
    result = _run_cli("deobfuscate", encoded, "--key", "otherkey")
    assert result.returncode == 0
    assert result.stdout.strip() == "Controller/Users/GET"


def test_cli_deobfuscate_bad_input():
    result = _run_cli("deobfuscate", "not base64!!")
    assert result.returncode != 0
    assert "cannot decode" in result.stderr


def test_cli_config_hides_license_key():
    result = _run_cli("config")
    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert data["license_key"] == "<redacted>"
    assert data["browser_monitoring"]["enable"] is True
