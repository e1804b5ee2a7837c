from __future__ import annotations

from typing import Dict, Iterable, Iterator, Tuple

from ._frozen import Freezable
from .errors import DuplicateResourceError, UnknownResourceError
from .model import ALL, normalize_identifier


class _ResourceView:
    """Restartable iterable over ``(resource, actions)`` pairs."""

    def __init__(self, catalog: "ResourceCatalog") -> None:
        self._catalog = catalog

    def __iter__(self) -> Iterator[Tuple[str, Tuple[str, ...]]]:
        for name, actions in self._catalog._actions.items():
            yield name, actions

    def __len__(self) -> int:
        return len(self._catalog._actions)


class ResourceCatalog(Freezable):
    """Resources and the fixed list of actions each one recognizes.

    Identifiers are normalized with :func:`normalize_identifier`. A ``"*"`` in
    an action list means the resource accepts any action; the sentinel itself
    is never reported as an action.
    """

    def __init__(self) -> None:
        self._actions: Dict[str, Tuple[str, ...]] = {}
        self._open: set[str] = set()

    def add_resource(self, resource: str, actions: Iterable[str] = ()) -> None:
        self._check_mutable()
        if not isinstance(resource, str) or not resource or resource == ALL:
            raise ValueError(f"invalid resource identifier: {resource!r}")
        name = normalize_identifier(resource)
        if name in self._actions:
            raise DuplicateResourceError(name)
        if isinstance(actions, str):
            actions = [actions]
        listed: list[str] = []
        for action in actions:
            if not isinstance(action, str) or not action:
                raise ValueError(f"action identifier of {name!r} must be a non-empty string, got {action!r}")
            if action == ALL:
                self._open.add(name)
                continue
            action = normalize_identifier(action)
            if action not in listed:
                listed.append(action)
        self._actions[name] = tuple(listed)

    def has_resource(self, resource: str) -> bool:
        return normalize_identifier(resource) in self._actions

    __contains__ = has_resource

    def __len__(self) -> int:
        return len(self._actions)

    def accepts_any_action(self, resource: str) -> bool:
        return self._lookup(resource) in self._open

    def has_action(self, resource: str, action: str) -> bool:
        name = self._lookup(resource)
        if name in self._open:
            return True
        return normalize_identifier(action) in self._actions[name]

    def actions(self, resource: str) -> Tuple[str, ...]:
        return self._actions[self._lookup(resource)]

    def resources(self) -> _ResourceView:
        return _ResourceView(self)

    def _lookup(self, resource: str) -> str:
        name = normalize_identifier(resource)
        if name not in self._actions:
            raise UnknownResourceError(name)
        return name


__all__ = ["ResourceCatalog"]
