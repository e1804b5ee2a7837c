import pytest

from rolegate.metrics.otel import OpenTelemetryMetrics


class _Instrument:
    def __init__(self):
        self.calls = []

    def add(self, amount, attributes=None):
        self.calls.append(("add", amount, attributes))

    def record(self, value, attributes=None):
        self.calls.append(("record", value, attributes))


class _Meter:
    def __init__(self):
        self.created = {}

    def create_counter(self, name, description="", unit=""):
        self.created[name] = _Instrument()
        return self.created[name]

    def create_histogram(self, name, description="", unit=""):
        self.created[name] = _Instrument()
        return self.created[name]


def test_instruments_receive_decisions():
    meter = _Meter()
    m = OpenTelemetryMetrics(meter=meter)
    m.inc("rolegate_decisions_total", {"decision": "deny"})
    m.observe("rolegate_decision_seconds", 0.25, {"decision": "deny"})
    assert meter.created["rolegate_decisions_total"].calls == [("add", 1, {"decision": "deny"})]
    assert meter.created["rolegate_decision_seconds"].calls == [("record", 0.25, {"decision": "deny"})]


def test_default_meter_from_api():
    pytest.importorskip("opentelemetry.metrics")
    m = OpenTelemetryMetrics()
    # the API's no-op meter accepts calls without an SDK
    m.inc("rolegate_decisions_total", {"decision": "allow"})
    m.observe("rolegate_decision_seconds", 0.1, {"decision": "allow"})
