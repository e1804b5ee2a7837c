from __future__ import annotations

try:
    from importlib.metadata import PackageNotFoundError, version
except Exception:  # pragma: no cover
    PackageNotFoundError = Exception  # type: ignore
    version = None  # type: ignore


def _detect_version() -> str:
    if version is None:
        return "0.1.0"
    try:
        return version("rolegate")
    except PackageNotFoundError:
        return "0.1.0"


__version__ = _detect_version()

from . import core  # noqa: E402
from .core.builder import AccessConfig, build_engine  # noqa: E402
from .core.engine import AccessEngine  # noqa: E402
from .core.errors import (  # noqa: E402
    ConflictingRuleError,
    CycleError,
    DuplicateResourceError,
    FrozenModelError,
    RoleGateError,
    UnknownActionError,
    UnknownResourceError,
    UnknownRoleError,
)
from .core.model import ALL, Decision, Effect, Rule, Verdict, normalize_identifier  # noqa: E402
from .core.resources import ResourceCatalog  # noqa: E402
from .core.roles import RoleGraph  # noqa: E402
from .core.rules import RuleSet  # noqa: E402
from .discovery import generate_resources  # noqa: E402
from .dispatch import DispatchGuard  # noqa: E402
from .store.config_loader import load_config  # noqa: E402

__all__ = [
    "__version__",
    "ALL",
    "AccessConfig",
    "AccessEngine",
    "ConflictingRuleError",
    "CycleError",
    "Decision",
    "DispatchGuard",
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
    "core",
    "generate_resources",
    "load_config",
    "normalize_identifier",
]
