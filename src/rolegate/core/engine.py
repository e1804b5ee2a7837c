from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

from .errors import UnknownResourceError, UnknownRoleError
from .model import Decision, Effect, normalize_identifier
from .ports import DecisionLogSink, MetricsSink
from .resources import ResourceCatalog
from .roles import RoleGraph
from .rules import RuleSet

logger = logging.getLogger("rolegate.engine")


class AccessEngine:
    """Answers "may role R perform action A on resource X?".

    The engine takes ownership of its role graph, catalog and rule set and
    freezes them, so it can be shared between threads without locking. To
    change the rules, build a new engine and swap the reference.

    Resolution: walk the role's lineage (itself, then inherited roles
    breadth-first); the first role with a matching rule decides, a deny
    winning over an allow at the same role and specificity. With no rule
    anywhere in the lineage the default policy applies.
    """

    def __init__(
        self,
        roles: RoleGraph,
        catalog: ResourceCatalog,
        rules: RuleSet,
        default: Effect | str = Effect.DENY,
        *,
        strict_resources: bool = True,
        logger_sink: Optional[DecisionLogSink] = None,
        metrics: Optional[MetricsSink] = None,
    ) -> None:
        self._roles = roles
        self._catalog = catalog
        self._rules = rules
        self._default = Effect.parse(default)
        self.strict_resources = bool(strict_resources)
        self.logger_sink = logger_sink
        self.metrics = metrics

        for part in (roles, catalog, rules):
            part.freeze()
        self._lineage = {role: roles.lineage(role) for role in roles.roles()}

    # --- properties ----------------------------------------------------------

    @property
    def default(self) -> Effect:
        return self._default

    @property
    def roles(self) -> RoleGraph:
        return self._roles

    @property
    def catalog(self) -> ResourceCatalog:
        return self._catalog

    @property
    def rules(self) -> RuleSet:
        return self._rules

    # --- queries -------------------------------------------------------------

    def evaluate(self, role: str, resource: str, action: str) -> Decision:
        start = time.perf_counter()
        decision = self._decide(role, resource, action)
        self._emit(decision, time.perf_counter() - start)
        return decision

    def is_allowed(self, role: str, resource: str, action: str) -> bool:
        return self.evaluate(role, resource, action).allowed

    def access_map(self, role: str) -> Dict[str, Dict[str, int]]:
        """Allow (1) / deny (0) for every listed action of every resource."""
        if role not in self._lineage:
            raise UnknownRoleError(role)
        out: Dict[str, Dict[str, int]] = {}
        for resource, actions in self._catalog.resources():
            out[resource] = {
                action: int(self._decide(role, resource, action).allowed) for action in actions
            }
        return out

    # --- internals -----------------------------------------------------------

    def _decide(self, role: str, resource: str, action: str) -> Decision:
        lineage = self._lineage.get(role)
        if lineage is None:
            raise UnknownRoleError(role)
        resource = normalize_identifier(resource)
        action = normalize_identifier(action)

        if not self._catalog.has_resource(resource):
            if self.strict_resources:
                raise UnknownResourceError(resource)
            return Decision(False, role, resource, action, reason="unknown_resource")

        for candidate in lineage:
            rule = self._rules.match(candidate, resource, action)
            if rule is not None:
                return Decision(
                    rule.effect is Effect.ALLOW,
                    role,
                    resource,
                    action,
                    reason="matched",
                    rule=rule,
                    via_role=candidate,
                )
        return Decision(self._default is Effect.ALLOW, role, resource, action, reason="default")

    def _emit(self, decision: Decision, elapsed: float) -> None:
        logger.debug(
            "rolegate: %s %s:%s -> %s (%s)",
            decision.role,
            decision.resource,
            decision.action,
            decision.effect,
            decision.reason,
        )
        if self.logger_sink is not None:
            try:
                self.logger_sink.log(_payload(decision, elapsed))
            except Exception:
                logger.exception("rolegate: decision logger sink failed")
        if self.metrics is not None:
            labels = {"decision": decision.effect}
            try:
                self.metrics.inc("rolegate_decisions_total", labels)
                observe = getattr(self.metrics, "observe", None)
                if observe is not None:
                    observe("rolegate_decision_seconds", elapsed, labels)
            except Exception:
                logger.exception("rolegate: metrics sink failed")


def _payload(decision: Decision, elapsed: float) -> Dict[str, Any]:
    rule = decision.rule
    return {
        "role": decision.role,
        "resource": decision.resource,
        "action": decision.action,
        "decision": decision.effect,
        "allowed": decision.allowed,
        "reason": decision.reason,
        "via_role": decision.via_role,
        "rule": None
        if rule is None
        else {"role": rule.role, "resource": rule.resource, "action": rule.action, "effect": rule.effect.value},
        "duration_ms": round(elapsed * 1000.0, 3),
    }


__all__ = ["AccessEngine"]
