from __future__ import annotations

import json
import logging

from vekstloop.core.logging import LogContext, build_log_event
from vekstloop.core.logging_config import JsonFormatter


def test_log_event_carries_context_fields():
    payload = build_log_event(
        "action.failed",
        LogContext(workspace_id="w1", user_id="u1", action="get_leads"),
        error_kind="not_found",
    )

    assert payload == {
        "event": "action.failed",
        "workspace_id": "w1",
        "user_id": "u1",
        "action": "get_leads",
        "error_kind": "not_found",
    }


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("vekstloop.test", logging.INFO, __file__, 1, "ticket.created", None, None)
    record.event = "ticket.created"
    record.ticket_id = "t1"

    line = json.loads(JsonFormatter().format(record))

    assert line["message"] == "ticket.created"
    assert line["level"] == "INFO"
    assert line["ticket_id"] == "t1"
    assert "timestamp" in line
