"""Tests for log redaction."""

from __future__ import annotations

import logging

from kitchen_mcp.logging_utils import REDACTED, SensitiveDataFilter


def _record(msg, *args):
    return logging.LogRecord("kitchen_mcp.test", logging.INFO, __file__, 1, msg, args, None)


def test_redacts_secrets_in_formatted_message():
    redactor = SensitiveDataFilter(["sat-secret", "reese-secret"])
    record = _record("cookie header: %s", "sat=sat-secret; reese84=reese-secret")

    assert redactor.filter(record) is True
    assert record.getMessage() == f"cookie header: sat={REDACTED}; reese84={REDACTED}"


def test_leaves_clean_records_untouched():
    redactor = SensitiveDataFilter(["sat-secret"])
    record = _record("searching %r", "eggs")

    redactor.filter(record)

    assert record.msg == "searching %r"
    assert record.args == ("eggs",)


def test_blank_secrets_are_ignored():
    redactor = SensitiveDataFilter(["", "   "])
    assert redactor.redact("nothing to hide") == "nothing to hide"


def test_filter_on_a_handler():
    class ListHandler(logging.Handler):
        def __init__(self):
            super().__init__()
            self.messages = []

        def emit(self, record):
            self.messages.append(record.getMessage())

    handler = ListHandler()
    handler.addFilter(SensitiveDataFilter(["jsession-secret"]))
    log = logging.getLogger("kitchen_mcp.test.redaction")
    log.addHandler(handler)
    log.setLevel(logging.INFO)
    try:
        log.info("session %s expired", "jsession-secret")
    finally:
        log.removeHandler(handler)

    assert handler.messages == [f"session {REDACTED} expired"]
