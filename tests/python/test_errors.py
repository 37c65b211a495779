"""Tests for the error collector."""

from __future__ import annotations

from apmagent.errors import ErrorCollector
from apmagent.redaction import Redactor, RedactionConfig
from apmagent.transaction import Transaction


def _collector(max_errors: int = 20) -> ErrorCollector:
    return ErrorCollector(Redactor(RedactionConfig(max_field_len=512, secrets={"LICENSE"})), max_errors=max_errors)


def test_exception_with_traceback():
    collector = _collector()
    try:
        raise KeyError("missing")
    except KeyError as exc:
        traced = collector.add(None, exc)
    assert traced.type == "KeyError"
    assert "missing" in traced.message
    assert "Traceback" in traced.stack


def test_string_error():
    traced = _collector().add(None, "something broke")
    assert traced.type == "Error"
    assert traced.message == "something broke"
    assert traced.stack is None


def test_object_with_message_and_stack():
    class JsLike:
        message = "oops"
        stack = "at handler (app.py:1)"

    traced = _collector().add(None, JsLike())
    assert traced.type == "JsLike"
    assert traced.message == "oops"
    assert traced.stack == "at handler (app.py:1)"


def test_mapping_with_message():
    traced = _collector().add(None, {"message": "from dict"})
    assert traced.message == "from dict"


def test_unknown_value_uses_repr():
    traced = _collector().add(None, 42)
    assert traced.type == "int"
    assert traced.message == "42"


def test_transaction_name_prefers_partial_name():
    collector = _collector()
    txn = Transaction(url="/orders/7")
    assert collector.add(txn, "a").transaction_name == "/orders/7"
    txn.partial_name = "Custom/Orders"
    assert collector.add(txn, "b").transaction_name == "Custom/Orders"


def test_limit_drops_extra_errors():
    collector = _collector(max_errors=2)
    for i in range(5):
        collector.add(None, f"err {i}")
    assert [e.message for e in collector.errors] == ["err 0", "err 1"]
    assert collector.dropped == 3


def test_secrets_are_scrubbed():
    traced = _collector().add(None, "key LICENSE and password=abc")
    assert "LICENSE" not in traced.message
    assert "abc" not in traced.message


def test_clear_returns_and_resets():
    collector = _collector(max_errors=1)
    collector.add(None, "one")
    collector.add(None, "two")
    drained = collector.clear()
    assert len(drained) == 1
    assert collector.errors == []
    assert collector.dropped == 0
