"""Logging setup for the stdio servers.

stdout carries the MCP protocol, so all log output goes to stderr. Cookie
values are redacted from every record before it is emitted.
"""

from __future__ import annotations

import logging
import sys
from typing import Iterable

REDACTED = "[redacted]"

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


class SensitiveDataFilter(logging.Filter):
    """Filter that replaces configured secret values in log messages."""

    def __init__(self, secrets: Iterable[str]):
        super().__init__()
        self._secrets = [s.strip() for s in secrets if s and s.strip()]

    def redact(self, message: str) -> str:
        for secret in self._secrets:
            message = message.replace(secret, REDACTED)
        return message

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True
        message = record.getMessage()
        sanitized = self.redact(message)
        if sanitized != message:
            record.msg = sanitized
            record.args = ()
        return True


def configure_logging(level: str = "INFO", secrets: Iterable[str] = ()) -> None:
    """Configure root logging to stderr, installing the redaction filter on its handlers."""
    logging.basicConfig(stream=sys.stderr, level=level.upper(), format=LOG_FORMAT)
    redactor = SensitiveDataFilter(secrets)
    for handler in logging.getLogger().handlers:
        handler.addFilter(redactor)
    # httpx logs every request URL at INFO; keep it quieter than ours
    logging.getLogger("httpx").setLevel(logging.WARNING)
