"""User-supplied naming and ignoring rules.

Rules are only ever appended. They are evaluated in the order they were
added and the first rule whose pattern matches decides the outcome.
"""

from __future__ import annotations

__all__ = ["NormalizationRule", "NormalizationResult", "RuleNormalizer"]

import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Union

from .logger import get_logger

logger = get_logger("normalizer")

_GROUP_REF = re.compile(r"\$(\d+)")


@dataclass(frozen=True)
class NormalizationRule:
    pattern: Pattern[str]
    replacement: Optional[str]

    @property
    def ignore(self) -> bool:
        return self.replacement is None

    def apply(self, path: str) -> Optional[str]:
        """Return the rewritten path, or ``None`` when the rule does not match."""
        match = self.pattern.search(path)
        if match is None:
            return None
        if self.replacement is None:
            return path
        expanded = _GROUP_REF.sub(
            lambda ref: _group_or_empty(match, int(ref.group(1))), self.replacement
        )
        return path[: match.start()] + expanded + path[match.end():]


def _group_or_empty(match: re.Match, index: int) -> str:
    if index > (match.re.groups or 0):
        return ""
    return match.group(index) or ""


@dataclass(frozen=True)
class NormalizationResult:
    name: str
    ignore: bool = False
    matched: bool = False


class RuleNormalizer:
    def __init__(self) -> None:
        self._rules: List[NormalizationRule] = []

    @property
    def rules(self) -> tuple[NormalizationRule, ...]:
        return tuple(self._rules)

    def add_simple(self, pattern: Union[str, Pattern[str]], replacement: Optional[str]) -> Optional[NormalizationRule]:
        """Append a rule; an invalid pattern is logged and nothing is added."""
        try:
            compiled = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)
        except (re.error, TypeError) as exc:
            logger.error("Invalid URL pattern %r: %s", pattern, exc)
            return None
        rule = NormalizationRule(pattern=compiled, replacement=replacement)
        self._rules.append(rule)
        return rule

    def normalize(self, path: str) -> NormalizationResult:
        for rule in self._rules:
            rewritten = rule.apply(path)
            if rewritten is None:
                continue
            return NormalizationResult(name=rewritten, ignore=rule.ignore, matched=True)
        return NormalizationResult(name=path)
