from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .engine import AccessEngine
from .errors import ConflictingRuleError, UnknownActionError, UnknownResourceError, UnknownRoleError
from .model import ALL, Effect, normalize_identifier
from .ports import DecisionLogSink, MetricsSink
from .resources import ResourceCatalog
from .roles import RoleGraph
from .rules import RuleSet

logger = logging.getLogger("rolegate.builder")

RuleTable = Mapping[str, Mapping[str, Iterable[str]]]


def _freeze_table(table: Optional[Mapping[str, Any]]) -> Mapping[str, Tuple[str, ...]]:
    return MappingProxyType({key: tuple(_as_list(value)) for key, value in (table or {}).items()})


def _freeze_rules(table: Optional[Mapping[str, Any]]) -> Mapping[str, Mapping[str, Tuple[str, ...]]]:
    return MappingProxyType({role: _freeze_table(resources) for role, resources in (table or {}).items()})


@dataclass(frozen=True)
class AccessConfig:
    """Static configuration a model is built from.

    Every table is read-only, nested levels included; action and role lists
    are stored as tuples.

    ``roles``: role -> roles it inherits from.
    ``resources``: resource -> actions.
    ``allow`` / ``deny``: role -> resource (or ``"*"``) -> actions (or ``["*"]``).
    """

    roles: Mapping[str, Iterable[str]] = field(default_factory=dict)
    resources: Mapping[str, Iterable[str]] = field(default_factory=dict)
    allow: RuleTable = field(default_factory=dict)
    deny: RuleTable = field(default_factory=dict)
    default: Effect = Effect.DENY

    def __post_init__(self) -> None:
        object.__setattr__(self, "roles", _freeze_table(self.roles))
        object.__setattr__(self, "resources", _freeze_table(self.resources))
        object.__setattr__(self, "allow", _freeze_rules(self.allow))
        object.__setattr__(self, "deny", _freeze_rules(self.deny))
        object.__setattr__(self, "default", Effect.parse(self.default))

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "AccessConfig":
        if not isinstance(doc, Mapping):
            raise ValueError(f"configuration must be a mapping, got {type(doc).__name__}")
        unknown = set(doc) - {"default", "roles", "resources", "allow", "deny"}
        if unknown:
            raise ValueError(f"unknown configuration keys: {sorted(unknown)}")
        return cls(
            roles={role: _as_list(parents) for role, parents in (doc.get("roles") or {}).items()},
            resources={res: _as_list(acts) for res, acts in (doc.get("resources") or {}).items()},
            allow=_rule_table(doc.get("allow")),
            deny=_rule_table(doc.get("deny")),
            default=Effect.parse(doc.get("default", "deny")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "default": self.default.value,
            "roles": {k: list(v) for k, v in self.roles.items()},
            "resources": {k: list(v) for k, v in self.resources.items()},
            "allow": {r: {res: list(a) for res, a in t.items()} for r, t in self.allow.items()},
            "deny": {r: {res: list(a) for res, a in t.items()} for r, t in self.deny.items()},
        }


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str) or not isinstance(value, Iterable):
        return [value]
    return list(value)


def _rule_table(raw: Optional[Mapping[str, Any]]) -> Dict[str, Dict[str, List[str]]]:
    out: Dict[str, Dict[str, List[str]]] = {}
    for role, table in (raw or {}).items():
        out[role] = {}
        for resource, actions in (table or {}).items():
            out[role][resource] = _as_list(actions)
    return out


def _rule_triples(table: RuleTable) -> Iterable[Tuple[str, str, str]]:
    for role, resources in table.items():
        for resource, actions in resources.items():
            if isinstance(actions, str):
                actions = [actions]
            for action in actions:
                yield role, resource, action


def build_engine(
    config: AccessConfig | Mapping[str, Any],
    *,
    strict_conflicts: bool = False,
    strict_resources: bool = True,
    logger_sink: Optional[DecisionLogSink] = None,
    metrics: Optional[MetricsSink] = None,
) -> AccessEngine:
    """Validate *config* and build an immutable :class:`AccessEngine` from it.

    Order: roles, inheritance edges, resources, allow rules, deny rules. The
    first invalid entry raises and no engine is produced.
    """
    if not isinstance(config, AccessConfig):
        config = AccessConfig.from_dict(config)

    roles = RoleGraph(config.roles)
    for parent, children in config.roles.items():
        for child in children:
            roles.add_inherit(parent, child)

    catalog = ResourceCatalog()
    for resource, actions in config.resources.items():
        catalog.add_resource(resource, actions)

    rules = RuleSet()
    for table, record in ((config.allow, rules.allow), (config.deny, rules.deny)):
        for role, resource, action in _rule_triples(table):
            _check_rule(roles, catalog, role, resource, action)
            record(role, resource, action)

    conflicts = list(rules.conflicts())
    if conflicts:
        if strict_conflicts:
            first = conflicts[0]
            raise ConflictingRuleError(first.role, first.resource, first.action)
        for rule in conflicts:
            logger.warning(
                "rolegate: (%s, %s, %s) is both allowed and denied; deny wins",
                rule.role,
                rule.resource,
                rule.action,
            )

    engine = AccessEngine(
        roles,
        catalog,
        rules,
        config.default,
        strict_resources=strict_resources,
        logger_sink=logger_sink,
        metrics=metrics,
    )
    logger.info(
        "rolegate: model built (%d roles, %d resources, %d rules, default=%s)",
        len(roles),
        len(catalog),
        len(rules),
        config.default.value,
    )
    return engine


def _check_rule(roles: RoleGraph, catalog: ResourceCatalog, role: str, resource: str, action: str) -> None:
    for part in (role, resource, action):
        if not isinstance(part, str) or not part:
            raise ValueError(f"rule identifiers must be non-empty strings, got {part!r}")
    if not roles.has_role(role):
        raise UnknownRoleError(role)
    if resource == ALL:
        return
    if not catalog.has_resource(resource):
        raise UnknownResourceError(normalize_identifier(resource))
    if action != ALL and not catalog.has_action(resource, action):
        raise UnknownActionError(normalize_identifier(resource), action)


__all__ = ["AccessConfig", "build_engine"]
