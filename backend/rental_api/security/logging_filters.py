"""Logging filters that scrub sensitive content."""

from __future__ import annotations

import logging
import re

_SENSITIVE_PATTERN = re.compile(
    r"(Bearer\s+[\w\.-]+"
    r"|access_token[\"']?\s*[:=]\s*[\"']?[\w\.-]+"
    r"|password[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+)",
    re.IGNORECASE,
)

_REDACTED = "**REDACTED**"


class SensitiveFilter(logging.Filter):
    """Replace bearer tokens and passwords in log records with a redaction marker."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = _SENSITIVE_PATTERN.sub(_REDACTED, record.msg)
        if record.args:
            if isinstance(record.args, dict):
                record.args = {
                    key: _scrub(value) for key, value in record.args.items()
                }
            else:
                record.args = tuple(_scrub(value) for value in record.args)
        return True


def _scrub(value: object) -> object:
    if isinstance(value, str):
        return _SENSITIVE_PATTERN.sub(_REDACTED, value)
    return value


__all__ = ["SensitiveFilter"]
