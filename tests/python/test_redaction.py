"""Tests for the redaction module."""

from __future__ import annotations

from apmagent.redaction import Redactor, RedactionConfig


def _make_redactor(max_field_len: int = 512, secrets: set | None = None) -> Redactor:
    return Redactor(RedactionConfig(max_field_len=max_field_len, secrets=secrets or set()))


def test_redact_license_key_pair():
    result = _make_redactor().redact("connect failed: license_key=0123456789ABC")
    assert "0123456789ABC" not in result
    assert "<redacted>" in result


def test_redact_password_pair():
    result = _make_redactor().redact("login failed: password=hunter2, retry")
    assert "hunter2" not in result
    assert result.endswith(", retry")


def test_redact_configured_secret():
    result = _make_redactor(secrets={"0123456789ABC"}).redact("key 0123456789ABC rejected")
    assert result == "key <redacted> rejected"


def test_truncate_long_string():
    result = _make_redactor(max_field_len=20).redact("a" * 100)
    assert result == "a" * 20 + "...(truncated)"


def test_scrub_does_not_truncate():
    result = _make_redactor(max_field_len=20).scrub("a" * 100)
    assert result == "a" * 100


def test_none_passthrough():
    r = _make_redactor()
    assert r.redact(None) is None
    assert r.scrub(None) is None


def test_plain_text_unchanged():
    assert _make_redactor().redact("nothing to hide") == "nothing to hide"
