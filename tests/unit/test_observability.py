"""Unit tests for structured logging utilities in ``observability``.

Validates the null handler, trace binding, and event construction behaviour
downstream consumers rely on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import pytest

from lib_object_mapper import Mapper, bind_trace_id, get_logger
from lib_object_mapper.observability import TRACE_ID, log_info, make_event


@dataclass
class Target:
    name: str = ""


def test_null_handler_present() -> None:
    """Package logger should always include a NullHandler to avoid surprises."""

    logger = get_logger()
    assert any(isinstance(handler, logging.NullHandler) for handler in logger.handlers)


def test_trace_id_in_log(caplog: pytest.LogCaptureFixture) -> None:
    """Structured logs should include the bound trace identifier and contextual fields."""

    caplog.set_level(logging.INFO, logger="lib_object_mapper")
    bind_trace_id("trace-123")
    try:
        log_info("mapping_registered", source="Row", destination="User")
    finally:
        bind_trace_id(None)
    record = caplog.records[-1]
    assert getattr(record, "context") == {"trace_id": "trace-123", "source": "Row", "destination": "User"}


def test_bind_trace_id_clears_context() -> None:
    bind_trace_id("trace-temp")
    bind_trace_id(None)
    assert TRACE_ID.get() is None


def test_make_event_merges_optional_payload() -> None:
    event = make_event(dict, Target, {"fields": ["name"]})
    assert event == {"source": "dict", "destination": "Target", "fields": ["name"]}


def test_make_event_accepts_missing_types() -> None:
    assert make_event(None, None) == {"source": None, "destination": None}


def test_object_mapped_event_emitted(caplog: pytest.LogCaptureFixture) -> None:
    """Each mapped element should leave a debug event naming the type pair."""

    caplog.set_level(logging.DEBUG, logger="lib_object_mapper")
    Mapper().map({"name": "Ada"}, Target)
    events = [record for record in caplog.records if record.getMessage() == "object_mapped"]
    assert events
    context = getattr(events[-1], "context")
    assert context["source"] == "dict"
    assert context["destination"] == "Target"
    assert context["fields"] == ["name"]
