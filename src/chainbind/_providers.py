from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ._tokens import Scope


if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(frozen=True)
class ValueProvider:
    value: object


@dataclass(frozen=True)
class FactoryProvider:
    factory: Callable[..., Any]
    scope: Scope = Scope.SINGLETON

    def __post_init__(self) -> None:
        if not callable(self.factory):
            msg = f"Factory must be callable, got {self.factory!r}"
            raise TypeError(msg)
        _validate_scope(self.scope)

    @property
    def target(self) -> Callable[..., Any]:
        return self.factory


@dataclass(frozen=True)
class ClassProvider:
    cls: type
    scope: Scope = Scope.SINGLETON

    def __post_init__(self) -> None:
        if not inspect.isclass(self.cls):
            msg = f"Expected a class, got {self.cls!r}. Use provide_factory() for plain callables."
            raise TypeError(msg)
        _validate_scope(self.scope)

    @property
    def target(self) -> type:
        return self.cls


Provider = ValueProvider | FactoryProvider | ClassProvider


def _validate_scope(scope: object) -> None:
    if not isinstance(scope, Scope):
        msg = f"Scope must be a Scope member, got {scope!r}"
        raise ValueError(msg)
