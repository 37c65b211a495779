"""Tests for the user rule normalizer."""

from __future__ import annotations

import re

from apmagent.normalizer import RuleNormalizer


def test_no_rules_returns_path_unmatched():
    result = RuleNormalizer().normalize("/a/b")
    assert result.name == "/a/b"
    assert result.matched is False
    assert result.ignore is False


def test_first_matching_rule_wins():
    normalizer = RuleNormalizer()
    normalizer.add_simple("^/a", "/First")
    normalizer.add_simple("^/a/b", "/Second")
    assert normalizer.normalize("/a/b").name == "/First/b"


def test_ignore_rule_marks_ignore():
    normalizer = RuleNormalizer()
    normalizer.add_simple(r"^/health$", None)
    result = normalizer.normalize("/health")
    assert result.ignore is True
    assert result.matched is True


def test_group_substitution():
    normalizer = RuleNormalizer()
    normalizer.add_simple(re.compile(r"^/item/([0-9a-f]+)$"), "/Item/$1")
    assert normalizer.normalize("/item/beef").name == "/Item/beef"


def test_missing_group_expands_to_empty():
    normalizer = RuleNormalizer()
    normalizer.add_simple(r"^/x$", "/X$2")
    assert normalizer.normalize("/x").name == "/X"


def test_rules_are_append_only():
    normalizer = RuleNormalizer()
    normalizer.add_simple("^/a", "/A")
    normalizer.add_simple("^/b", None)
    assert [r.replacement for r in normalizer.rules] == ["/A", None]
    assert not hasattr(normalizer, "remove")
    assert isinstance(normalizer.rules, tuple)


def test_invalid_pattern_adds_nothing():
    normalizer = RuleNormalizer()
    assert normalizer.add_simple("(", "/Broken") is None
    assert normalizer.add_simple(None, None) is None
    assert normalizer.rules == ()
