from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from ._frozen import Freezable
from .errors import CycleError, UnknownRoleError


class RoleGraph(Freezable):
    """Roles and their direct inherits-from edges.

    ``add_inherit("admin", "guest")`` means *admin* inherits the permissions of
    *guest*. Edges keep their registration order, and :meth:`lineage` walks them
    breadth-first so rule resolution is reproducible.
    """

    def __init__(self, roles: Optional[Iterable[str]] = None) -> None:
        self._edges: Dict[str, List[str]] = {}
        for role in roles or ():
            self.add_role(role)

    def add_role(self, role: str) -> None:
        self._check_mutable()
        if not isinstance(role, str) or not role:
            raise ValueError(f"role identifier must be a non-empty string, got {role!r}")
        self._edges.setdefault(role, [])

    def add_inherit(self, parent: str, child: str) -> None:
        self._check_mutable()
        self._require(parent)
        self._require(child)
        if child in self._edges[parent]:
            return
        path = self._path(child, parent)
        if path is not None:
            raise CycleError(parent, child, (parent,) + path)
        self._edges[parent].append(child)

    def has_role(self, role: str) -> bool:
        return role in self._edges

    __contains__ = has_role

    def __len__(self) -> int:
        return len(self._edges)

    def roles(self) -> Iterator[str]:
        return iter(self._edges)

    def parents_of(self, role: str) -> Tuple[str, ...]:
        """Roles that *role* inherits from directly, in registration order."""
        self._require(role)
        return tuple(self._edges[role])

    def inherits(self, role: str, other: str) -> bool:
        """True if *other* is reachable from *role* (a role inherits itself)."""
        self._require(role)
        self._require(other)
        return other in self.lineage(role)

    def lineage(self, role: str) -> Tuple[str, ...]:
        """*role* followed by every inherited role in breadth-first order."""
        self._require(role)
        seen = {role}
        order = [role]
        queue = deque([role])
        while queue:
            for child in self._edges[queue.popleft()]:
                if child not in seen:
                    seen.add(child)
                    order.append(child)
                    queue.append(child)
        return tuple(order)

    # --- internals -----------------------------------------------------------

    def _require(self, role: str) -> None:
        if role not in self._edges:
            raise UnknownRoleError(role)

    def _path(self, start: str, goal: str) -> Optional[Tuple[str, ...]]:
        """Edge path from *start* to *goal*, or None when unreachable."""
        prev: Dict[str, Optional[str]] = {start: None}
        queue = deque([start])
        while queue:
            node = queue.popleft()
            if node == goal:
                path = [node]
                while prev[path[-1]] is not None:
                    path.append(prev[path[-1]])  # type: ignore[arg-type]
                return tuple(reversed(path))
            for nxt in self._edges[node]:
                if nxt not in prev:
                    prev[nxt] = node
                    queue.append(nxt)
        return None


__all__ = ["RoleGraph"]
