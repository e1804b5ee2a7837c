from __future__ import annotations

import logging
from typing import Callable, Generic, Tuple, TypeVar

from .core.engine import AccessEngine
from .core.model import normalize_identifier

logger = logging.getLogger("rolegate.dispatch")

T = TypeVar("T")

OutcomeHandler = Callable[[str, str, str], T]


class DispatchGuard(Generic[T]):
    """Runs the access check a host application performs before each request.

    The host supplies how to find the current request target and role, and
    what to do on either outcome; the guard returns whatever the chosen
    handler returns. Assigning a new engine to :attr:`engine` swaps the model
    for subsequent requests.
    """

    def __init__(
        self,
        engine: AccessEngine,
        *,
        resolve_request: Callable[[], Tuple[str, str]],
        resolve_active_role: Callable[[], str],
        on_allowed: OutcomeHandler[T],
        on_denied: OutcomeHandler[T],
    ) -> None:
        self.engine = engine
        self.resolve_request = resolve_request
        self.resolve_active_role = resolve_active_role
        self.on_allowed = on_allowed
        self.on_denied = on_denied

    def before_dispatch(self) -> T:
        role = self.resolve_active_role()
        controller, action = self.resolve_request()
        resource = normalize_identifier(controller)
        action = normalize_identifier(action)
        if self.engine.is_allowed(role, resource, action):
            return self.on_allowed(role, resource, action)
        logger.info("rolegate: denied %s on %s:%s", role, resource, action)
        return self.on_denied(role, resource, action)


__all__ = ["DispatchGuard"]
