from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

ALL = "*"
"""Sentinel meaning "all resources" or "all actions"."""


class Effect(str, Enum):
    ALLOW = "allow"
    DENY = "deny"

    @classmethod
    def parse(cls, value: "Effect | str | bool") -> "Effect":
        """Accept an Effect, its name/value in any case, or a bool (True = allow)."""
        if isinstance(value, Effect):
            return value
        if isinstance(value, bool):
            return cls.ALLOW if value else cls.DENY
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"invalid effect: {value!r} (expected 'allow' or 'deny')") from None


class Verdict(str, Enum):
    EXPLICIT_ALLOW = "explicit_allow"
    EXPLICIT_DENY = "explicit_deny"
    NO_RULE = "no_rule"


@dataclass(frozen=True)
class Rule:
    role: str
    resource: str
    action: str
    effect: Effect

    @property
    def verdict(self) -> Verdict:
        return Verdict.EXPLICIT_ALLOW if self.effect is Effect.ALLOW else Verdict.EXPLICIT_DENY


@dataclass(frozen=True)
class Decision:
    allowed: bool
    role: str
    resource: str
    action: str
    reason: str
    rule: Optional[Rule] = None
    via_role: Optional[str] = None

    @property
    def effect(self) -> str:
        return "allow" if self.allowed else "deny"


def normalize_identifier(value: str) -> str:
    """Lower-case the first character of a resource or action identifier.

    ``"UserProfile"`` becomes ``"userProfile"``; ``"*"`` and ``""`` are unchanged.
    """
    if not value:
        return value
    return value[:1].lower() + value[1:]


__all__ = ["ALL", "Effect", "Verdict", "Rule", "Decision", "normalize_identifier"]
