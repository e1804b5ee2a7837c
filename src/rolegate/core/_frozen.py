from __future__ import annotations

from .errors import FrozenModelError


class Freezable:
    """Mixin for model components that become read-only once an engine owns them."""

    _frozen: bool = False

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            raise FrozenModelError(f"{type(self).__name__} is frozen; build a new model instead")
