from __future__ import annotations

from typing import Any, Dict, Optional

from rolegate.core.ports import MetricsSink

try:
    from prometheus_client import Counter, Histogram  # type: ignore
except Exception:  # pragma: no cover
    Counter = Histogram = None  # type: ignore


class PrometheusMetrics(MetricsSink):
    """Prometheus-based MetricsSink.

    Exposes:
      - rolegate_decisions_total{decision="allow|deny"}
      - rolegate_decision_seconds{decision="allow|deny"} (Histogram)

    Pass a dedicated ``registry`` to avoid clashing with the global one (tests,
    several engines in one process).
    """

    _counter: Optional[Any]
    _hist: Optional[Any]

    def __init__(self, registry: Any = None) -> None:
        self._counter = None
        self._hist = None

        if Counter is None or Histogram is None:  # pragma: no cover
            return

        kwargs: Dict[str, Any] = {}
        if registry is not None:
            kwargs["registry"] = registry
        self._counter = Counter(
            "rolegate_decisions_total",
            "Total rolegate decisions by effect.",
            labelnames=("decision",),
            **kwargs,
        )
        self._hist = Histogram(
            "rolegate_decision_seconds",
            "rolegate decision evaluation duration in seconds.",
            labelnames=("decision",),
            **kwargs,
        )

    # -- MetricsSink ------------------------------------------------------------

    def inc(self, name: str, labels: Dict[str, str] | None = None) -> None:
        """Increment ``rolegate_decisions_total``; *name* is accepted for the protocol and ignored."""
        if self._counter is None:
            return
        decision = (labels or {}).get("decision", "unknown")
        self._counter.labels(decision=decision).inc()

    def observe(self, name: str, value: float, labels: Dict[str, str] | None = None) -> None:
        if self._hist is None:
            return
        decision = (labels or {}).get("decision", "unknown")
        self._hist.labels(decision=decision).observe(float(value))
