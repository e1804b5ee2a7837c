from .builder import AccessConfig, build_engine
from .engine import AccessEngine
from .errors import (
    ConflictingRuleError,
    CycleError,
    DuplicateResourceError,
    FrozenModelError,
    RoleGateError,
    UnknownActionError,
    UnknownResourceError,
    UnknownRoleError,
)
from .model import ALL, Decision, Effect, Rule, Verdict, normalize_identifier
from .resources import ResourceCatalog
from .roles import RoleGraph
from .rules import RuleSet

__all__ = [
    "ALL",
    "AccessConfig",
    "AccessEngine",
    "ConflictingRuleError",
    "CycleError",
    "Decision",
    "DuplicateResourceError",
    "Effect",
    "FrozenModelError",
    "ResourceCatalog",
    "RoleGateError",
    "RoleGraph",
    "Rule",
    "RuleSet",
    "UnknownActionError",
    "UnknownResourceError",
    "UnknownRoleError",
    "Verdict",
    "build_engine",
    "normalize_identifier",
]
