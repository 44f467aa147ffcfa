"""Logging filters that scrub sensitive content."""

from __future__ import annotations

import logging
import re

_REDACTED = "**REDACTED**"

_SENSITIVE_PATTERN = re.compile(
    r"(Bearer\s+[\w\.-]+"
    r"|\"(?:[a-z]*password|[a-z]*token)\"\s*:\s*\"[^\"]*\")",
    re.IGNORECASE,
)


def redact(text: str) -> str:
    """Replace bearer tokens and password/token JSON fields in ``text``."""
    return _SENSITIVE_PATTERN.sub(_REDACTED, text)


class SensitiveFilter(logging.Filter):
    """Replace sensitive tokens in log messages with a redaction marker."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                redact(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


__all__ = ["SensitiveFilter", "redact"]
