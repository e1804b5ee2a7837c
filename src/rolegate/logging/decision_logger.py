from __future__ import annotations

import json
import logging
import random
from typing import Any, Dict

from ..core.ports import DecisionLogSink


class DecisionLogger(DecisionLogSink):
    """Audit sink that writes one record per decision to the ``rolegate.audit`` logger.

    Args:
        sample_rate: probability in [0, 1] that an allowed decision is logged.
        always_log_denials: log every denial regardless of ``sample_rate``.
        as_json: emit compact JSON; otherwise a ``key=value`` line.
        level: logging level for the records.
        logger_name: target logger.
    """

    def __init__(
        self,
        *,
        sample_rate: float = 1.0,
        always_log_denials: bool = True,
        as_json: bool = False,
        level: int = logging.INFO,
        logger_name: str = "rolegate.audit",
    ) -> None:
        self.sample_rate = max(0.0, min(1.0, float(sample_rate)))
        self.always_log_denials = bool(always_log_denials)
        self.as_json = bool(as_json)
        self.level = level
        self.logger = logging.getLogger(logger_name)

    def _sampled(self, payload: Dict[str, Any]) -> bool:
        if self.always_log_denials and not payload.get("allowed", False):
            return True
        if self.sample_rate >= 1.0:
            return True
        if self.sample_rate <= 0.0:
            return False
        return random.random() < self.sample_rate

    def format(self, payload: Dict[str, Any]) -> str:
        if self.as_json:
            return json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
        rule = payload.get("rule")
        rule_txt = "-" if not rule else f"{rule['role']}:{rule['resource']}:{rule['action']}"
        return (
            f"decision={payload.get('decision')} role={payload.get('role')} "
            f"resource={payload.get('resource')} action={payload.get('action')} "
            f"reason={payload.get('reason')} rule={rule_txt}"
        )

    def log(self, payload: Dict[str, Any]) -> None:
        if not self._sampled(payload):
            return
        self.logger.log(self.level, self.format(payload))


__all__ = ["DecisionLogger"]
