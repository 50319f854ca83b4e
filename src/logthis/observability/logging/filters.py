"""Observability – SensitiveFieldsFilter."""
from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset({
    "password", "passwd", "secret", "token", "api_key", "apikey",
    "authorization", "credit_card", "card_number", "cvv", "ssn",
})

# (compiled regex, replacement)
_EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+\-]+@([A-Za-z0-9.\-]+\.[A-Za-z]{2,})\b")
_SSN_RE   = re.compile(r"\b\d{3}-?\d{2}-?\d{4}\b")
_CARD_RE  = re.compile(r"\b(\d{4})[ \-]?(\d{4})[ \-]?(\d{4})[ \-]?(\d{4})\b")

_TEXT_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (_CARD_RE,  r"****-****-****-\4"),
    (_SSN_RE,   "***-**-****"),
    (_EMAIL_RE, r"***@\1"),
)


class SensitiveFieldsFilter:
    """Replace values of sensitive keys with ``[REDACTED]``."""

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        self._fields = frozenset(f.lower() for f in (sensitive_fields or DEFAULT_SENSITIVE_FIELDS))

    def redact(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return {k: (self.REDACTED if k.lower() in self._fields else v) for k, v in data.items()}

    def redact_deep(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Recursively redact nested dicts."""
        result: dict[str, Any] = {}
        for k, v in data.items():
            if k.lower() in self._fields:
                result[k] = self.REDACTED
            elif isinstance(v, Mapping):
                result[k] = self.redact_deep(v)
            else:
                result[k] = v
        return result

    @staticmethod
    def redact_text(text: str) -> str:
        """Mask card numbers, SSNs and email local parts inside free text."""
        for pattern, replacement in _TEXT_PATTERNS:
            text = pattern.sub(replacement, text)
        return text


__all__ = ["DEFAULT_SENSITIVE_FIELDS", "SensitiveFieldsFilter"]
