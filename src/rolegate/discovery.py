"""Derive a resource table from controller classes.

This runs outside the engine, typically once at startup::

    resources = generate_resources(myapp.controllers)
    engine = build_engine({"resources": resources, ...})

A class whose name contains ``Controller`` becomes a resource named after the
class with ``Controller`` removed and the first letter lower-cased
(``UserProfileController`` -> ``userProfile``). Every public method ending in
``_action`` or ``Action`` becomes an action (``show_action`` -> ``show``,
``listAction`` -> ``list``). The ``"*"`` sentinel is appended to each action
list so rules may address all actions.
"""

from __future__ import annotations

import inspect
import re
from types import ModuleType
from typing import Any, Dict, Iterable, Iterator, List

from .core.model import ALL, normalize_identifier

_ACTION_SUFFIX = re.compile(r"(_action|Action)$")


def _classes(source: Any) -> Iterator[type]:
    if isinstance(source, ModuleType):
        for _, obj in inspect.getmembers(source, inspect.isclass):
            # skip names a module merely imported
            if obj.__module__ == source.__name__:
                yield obj
    elif inspect.isclass(source):
        yield source
    else:
        raise TypeError(f"expected a module or a class, got {type(source).__name__}")


def controller_actions(cls: type) -> List[str]:
    """Action names of *cls* in definition order, own methods before inherited ones."""
    actions: List[str] = []
    for klass in cls.__mro__:
        if klass is object:
            continue
        for name, member in vars(klass).items():
            if name.startswith("_") or not _ACTION_SUFFIX.search(name):
                continue
            if not (callable(member) or isinstance(member, (staticmethod, classmethod))):
                continue
            action = normalize_identifier(_ACTION_SUFFIX.sub("", name))
            if action and action not in actions:
                actions.append(action)
    return actions


def generate_resources(*sources: Any) -> Dict[str, List[str]]:
    """Build ``{resource: [action, ..., "*"]}`` from modules and/or classes."""
    resources: Dict[str, List[str]] = {}
    for cls in _iter_all(sources):
        if "Controller" not in cls.__name__:
            continue
        name = normalize_identifier(cls.__name__.replace("Controller", ""))
        actions = controller_actions(cls)
        if not name or not actions:
            continue
        resources[name] = actions + [ALL]
    return resources


def _iter_all(sources: Iterable[Any]) -> Iterator[type]:
    for source in sources:
        yield from _classes(source)


__all__ = ["generate_resources", "controller_actions"]
