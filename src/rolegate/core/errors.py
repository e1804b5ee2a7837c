from __future__ import annotations

from typing import Any


class RoleGateError(Exception):
    """Base class for every error raised by rolegate."""


class UnknownRoleError(RoleGateError, KeyError):
    def __init__(self, role: Any) -> None:
        self.role = role
        super().__init__(f"unknown role: {role!r}")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0])


class UnknownResourceError(RoleGateError, KeyError):
    def __init__(self, resource: Any) -> None:
        self.resource = resource
        super().__init__(f"unknown resource: {resource!r}")

    def __str__(self) -> str:
        return str(self.args[0])


class UnknownActionError(RoleGateError, KeyError):
    """A rule names an action its resource does not expose."""

    def __init__(self, resource: str, action: Any) -> None:
        self.resource = resource
        self.action = action
        super().__init__(f"unknown action {action!r} on resource {resource!r}")

    def __str__(self) -> str:
        return str(self.args[0])


class DuplicateResourceError(RoleGateError, ValueError):
    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(f"resource already registered: {resource!r}")


class CycleError(RoleGateError, ValueError):
    """Adding an inheritance edge would make the role graph cyclic."""

    def __init__(self, parent: str, child: str, path: tuple[str, ...] = ()) -> None:
        self.parent = parent
        self.child = child
        self.path = path
        loop = " -> ".join(path) if path else f"{parent} -> {child}"
        super().__init__(f"inheritance cycle: {loop}")


class ConflictingRuleError(RoleGateError, ValueError):
    def __init__(self, role: str, resource: str, action: str) -> None:
        self.role = role
        self.resource = resource
        self.action = action
        super().__init__(
            f"rule ({role!r}, {resource!r}, {action!r}) is both allowed and denied"
        )


class FrozenModelError(RoleGateError, RuntimeError):
    """The component is owned by an engine and can no longer change."""


__all__ = [
    "RoleGateError",
    "UnknownRoleError",
    "UnknownResourceError",
    "UnknownActionError",
    "DuplicateResourceError",
    "CycleError",
    "ConflictingRuleError",
    "FrozenModelError",
]
