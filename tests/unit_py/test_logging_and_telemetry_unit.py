import json
import logging

import pytest

from micro_spark.logging import _JsonFormatter, describe_callable, get_logger, log_event
from micro_spark.telemetry import MetricsCollector


pytestmark = pytest.mark.unit


def test_get_logger_is_namespaced_and_configured_once():
    logger = get_logger("unit")
    assert logger.name == "micro_spark.unit"
    handlers = list(logger.handlers)
    assert get_logger("unit").handlers == handlers
    assert len(handlers) == 1


def test_json_formatter_includes_extras():
    record = logging.LogRecord("micro_spark.x", logging.WARNING, __file__, 1, "failed %s", ("job",), None)
    record.event = "job"
    record.error = "ValueError('x')"
    data = json.loads(_JsonFormatter().format(record))
    assert data["level"] == "WARNING"
    assert data["msg"] == "failed job"
    assert data["event"] == "job"
    assert data["error"] == "ValueError('x')"


def test_log_event_attaches_payload(caplog):
    logger = get_logger("unit.events")
    caplog.set_level(logging.INFO, logger="micro_spark.unit.events")
    log_event(logger, "listeners_cleared", {"key": "x"})
    record = caplog.records[-1]
    assert record.event == "listeners_cleared"
    assert record.payload == {"key": "x"}


def test_describe_callable():
    def named():
        return None

    assert describe_callable(named).endswith("named")
    assert describe_callable(object()).startswith("<object")


def test_metrics_collector():
    metrics = MetricsCollector()
    metrics.increment("a")
    metrics.increment("a", 2)
    with metrics.time("t1"):
        pass
    assert metrics.snapshot() == {"a": 3}
    assert "t1" in metrics.timings
    metrics.reset()
    assert metrics.snapshot() == {} and metrics.timings == {}
