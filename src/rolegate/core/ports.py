from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class DecisionLogSink(Protocol):
    """Receives one audit payload per decision."""

    def log(self, payload: Dict[str, Any]) -> None: ...


@runtime_checkable
class MetricsSink(Protocol):
    """Counter sink; implementations may also define ``observe(name, value, labels)``."""

    def inc(self, name: str, labels: Optional[Dict[str, str]] = None) -> None: ...


@runtime_checkable
class ConfigSource(Protocol):
    """Where a configuration document comes from (file, HTTP, ...)."""

    def load(self) -> Dict[str, Any]: ...

    def etag(self) -> Optional[str]: ...


__all__ = ["DecisionLogSink", "MetricsSink", "ConfigSource"]
