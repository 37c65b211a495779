"""Scrubbing for text the agent records on behalf of the application."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

from .config import get_max_field_len

_DEFAULT_PATTERNS = [
    re.compile(r"(?i)license[_-]?key\s*[:=]\s*[^\s,]+"),
    re.compile(r"(?i)password\s*[:=]\s*[^\s,]+"),
]


@dataclass
class RedactionConfig:
    max_field_len: int
    secrets: set[str] = field(default_factory=set)


def load_redaction_config(secrets: Iterable[str] = ()) -> RedactionConfig:
    return RedactionConfig(
        max_field_len=get_max_field_len(),
        secrets={s for s in secrets if s},
    )


class Redactor:
    def __init__(self, config: RedactionConfig | None = None) -> None:
        self.config = config or load_redaction_config()

    def scrub(self, value: str | None) -> str | None:
        """Replace secrets in ``value`` without shortening it."""
        if value is None:
            return None
        scrubbed = value
        for secret in self.config.secrets:
            scrubbed = scrubbed.replace(secret, "<redacted>")
        for pattern in _DEFAULT_PATTERNS:
            scrubbed = pattern.sub("<redacted>", scrubbed)
        return scrubbed

    def redact(self, value: str | None) -> str | None:
        redacted = self.scrub(value)
        if redacted is None:
            return None
        if len(redacted) > self.config.max_field_len:
            redacted = redacted[: self.config.max_field_len] + "...(truncated)"
        return redacted
