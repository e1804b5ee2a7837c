import json
import logging

from rolegate import build_engine
from rolegate.logging.decision_logger import DecisionLogger


class DummyLogger:
    def __init__(self):
        self.records = []

    def log(self, level, msg):
        self.records.append((level, msg))


def _payload(allowed=True):
    return {
        "role": "guest",
        "resource": "shop",
        "action": "view",
        "decision": "allow" if allowed else "deny",
        "allowed": allowed,
        "reason": "matched" if allowed else "default",
        "via_role": "guest" if allowed else None,
        "rule": {"role": "guest", "resource": "shop", "action": "*", "effect": "allow"} if allowed else None,
        "duration_ms": 0.01,
    }


def test_json_output():
    dl = DecisionLogger(as_json=True)
    dl.logger = DummyLogger()
    dl.log(_payload())
    level, msg = dl.logger.records[-1]
    assert level == logging.INFO
    assert json.loads(msg)["decision"] == "allow"


def test_text_output():
    dl = DecisionLogger(level=logging.WARNING)
    dl.logger = DummyLogger()
    dl.log(_payload(allowed=False))
    level, msg = dl.logger.records[-1]
    assert level == logging.WARNING
    assert msg.startswith("decision=deny role=guest resource=shop action=view")
    assert msg.endswith("rule=-")


def test_sampling_skips_allows_but_keeps_denials(monkeypatch):
    monkeypatch.setattr("random.random", lambda: 0.99)
    dl = DecisionLogger(sample_rate=0.5)
    dl.logger = DummyLogger()
    dl.log(_payload(allowed=True))
    dl.log(_payload(allowed=False))
    assert len(dl.logger.records) == 1
    assert "decision=deny" in dl.logger.records[0][1]


def test_sampling_hit(monkeypatch):
    monkeypatch.setattr("random.random", lambda: 0.0)
    dl = DecisionLogger(sample_rate=0.5)
    dl.logger = DummyLogger()
    dl.log(_payload())
    assert len(dl.logger.records) == 1


def test_zero_rate_without_forced_denials():
    dl = DecisionLogger(sample_rate=0.0, always_log_denials=False)
    dl.logger = DummyLogger()
    dl.log(_payload(allowed=False))
    assert dl.logger.records == []


def test_wired_into_engine(caplog):
    engine = build_engine(
        {"roles": {"guest": []}, "resources": {"shop": ["view"]}, "allow": {"guest": {"shop": ["view"]}}},
        logger_sink=DecisionLogger(as_json=True),
    )
    with caplog.at_level(logging.INFO, logger="rolegate.audit"):
        engine.is_allowed("guest", "shop", "view")
    records = [r for r in caplog.records if r.name == "rolegate.audit"]
    assert len(records) == 1
    assert json.loads(records[0].getMessage())["via_role"] == "guest"
