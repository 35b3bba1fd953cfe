import logging

import pytest

from aliyun_storage import Instrumenter, Outcome


def test_outcome_metadata_is_merged_into_payload():
    events = []
    instrumenter = Instrumenter("Aliyun", [events.append])

    result = instrumenter.instrument(
        "url", lambda: Outcome("https://x", {"url": "https://x"}), key="k"
    )

    assert result == "https://x"
    assert events[0].payload == {"key": "k", "url": "https://x"}
    assert events[0].name == "service_url"
    assert events[0].duration_ms >= 0
    assert not events[0].failed


def test_plain_results_pass_through():
    instrumenter = Instrumenter("Aliyun")

    assert instrumenter.instrument("exist", lambda: True, key="k") is True


def test_exceptions_propagate_unmodified():
    events = []
    instrumenter = Instrumenter("Aliyun")
    instrumenter.subscribe(events.append)
    error = RuntimeError("boom")

    def body():
        raise error

    with pytest.raises(RuntimeError) as exc_info:
        instrumenter.instrument("upload", body, key="k")

    assert exc_info.value is error
    assert events[0].failed
    assert events[0].payload["exception"] == ["RuntimeError", "boom"]


def test_events_are_logged(caplog):
    instrumenter = Instrumenter("Aliyun")

    with caplog.at_level(logging.INFO, logger="aliyun_storage.instrumentation"):
        instrumenter.instrument("delete", lambda: None, key="k")

    record = caplog.records[-1]
    assert record.getMessage() == "Storage operation completed"
    assert record.operation == "service_delete"
    assert record.payload == {"key": "k"}
    assert record.span_id


def test_each_call_gets_its_own_span():
    events = []
    instrumenter = Instrumenter("Aliyun", [events.append])

    instrumenter.instrument("exist", lambda: False, key="a")
    instrumenter.instrument("exist", lambda: False, key="a")

    assert events[0].span_id != events[1].span_id
