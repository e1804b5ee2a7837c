from __future__ import annotations

from typing import Any, Dict, Optional

from rolegate.core.ports import MetricsSink

try:
    from opentelemetry.metrics import get_meter  # type: ignore
except Exception:  # pragma: no cover
    get_meter = None  # type: ignore


class OpenTelemetryMetrics(MetricsSink):
    """OpenTelemetry-based MetricsSink.

    Creates:
      - Counter: rolegate_decisions_total (attribute: decision)
      - Histogram: rolegate_decision_seconds (unit: s)
    """

    _counter: Optional[Any]
    _hist: Optional[Any]

    def __init__(self, meter: Any = None) -> None:
        self._counter = None
        self._hist = None

        if meter is None:
            if get_meter is None:  # pragma: no cover
                return
            meter = get_meter("rolegate.metrics")

        self._counter = meter.create_counter(
            name="rolegate_decisions_total",
            description="Total rolegate decisions by effect.",
        )
        self._hist = meter.create_histogram(
            name="rolegate_decision_seconds",
            description="rolegate decision evaluation duration in seconds.",
            unit="s",
        )

    # -- MetricsSink ------------------------------------------------------------

    def inc(self, name: str, labels: Dict[str, str] | None = None) -> None:
        if self._counter is None:
            return
        decision = (labels or {}).get("decision", "unknown")
        self._counter.add(1, {"decision": decision})

    def observe(self, name: str, value: float, labels: Dict[str, str] | None = None) -> None:
        if self._hist is None:
            return
        decision = (labels or {}).get("decision", "unknown")
        self._hist.record(float(value), {"decision": decision})
