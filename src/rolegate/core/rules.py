from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple

from ._frozen import Freezable
from .model import ALL, Effect, Rule, Verdict, normalize_identifier

_Key = Tuple[str, str, str]


class RuleSet(Freezable):
    """Explicit allow and deny rules keyed by ``(role, resource, action)``.

    Allow and deny rules are kept apart, so recording the same triple under
    both polarities is possible; :meth:`match` resolves it in favour of deny.
    """

    def __init__(self) -> None:
        self._allow: Dict[_Key, Rule] = {}
        self._deny: Dict[_Key, Rule] = {}

    def allow(self, role: str, resource: str = ALL, action: str = ALL) -> Rule:
        return self._add(self._allow, role, resource, action, Effect.ALLOW)

    def deny(self, role: str, resource: str = ALL, action: str = ALL) -> Rule:
        return self._add(self._deny, role, resource, action, Effect.DENY)

    def match(self, role: str, resource: str, action: str) -> Optional[Rule]:
        """The rule that decides the query for *role* alone, if any.

        Keys are grouped by the number of ``"*"`` they use and tried from
        most to least specific: ``(resource, action)``, then
        ``(resource, *)`` and ``(*, action)`` together, then ``(*, *)``.
        Within one level any deny beats any allow.
        """
        resource = normalize_identifier(resource)
        action = normalize_identifier(action)
        for level in _levels(role, resource, action):
            denied = [self._deny[k] for k in level if k in self._deny]
            if denied:
                return denied[0]
            allowed = [self._allow[k] for k in level if k in self._allow]
            if allowed:
                return allowed[0]
        return None

    def lookup(self, role: str, resource: str, action: str) -> Verdict:
        rule = self.match(role, resource, action)
        return Verdict.NO_RULE if rule is None else rule.verdict

    def conflicts(self) -> Iterator[Rule]:
        """Deny rules whose exact triple is also allowed."""
        for key, rule in self._deny.items():
            if key in self._allow:
                yield rule

    def rules(self) -> Iterator[Rule]:
        yield from self._allow.values()
        yield from self._deny.values()

    def __len__(self) -> int:
        return len(self._allow) + len(self._deny)

    def _add(self, table: Dict[_Key, Rule], role: str, resource: str, action: str, effect: Effect) -> Rule:
        self._check_mutable()
        if not isinstance(role, str) or not role:
            raise ValueError(f"rule role must be a non-empty string, got {role!r}")
        for part in (resource, action):
            if not isinstance(part, str) or not part:
                raise ValueError(f"rule for role {role!r} needs string identifiers, got {part!r}")
        rule = Rule(role, normalize_identifier(resource), normalize_identifier(action), effect)
        table[(rule.role, rule.resource, rule.action)] = rule
        return rule


def _levels(role: str, resource: str, action: str) -> Iterator[Tuple[_Key, ...]]:
    seen: set[_Key] = set()
    for level in (
        ((role, resource, action),),
        ((role, resource, ALL), (role, ALL, action)),
        ((role, ALL, ALL),),
    ):
        keys = tuple(k for k in level if k not in seen)
        seen.update(keys)
        if keys:
            yield keys


__all__ = ["RuleSet"]
