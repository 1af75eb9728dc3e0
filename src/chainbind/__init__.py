"""Hierarchical dependency injection library.

This package builds object graphs from a chain of injectors. Every call to
`provide_value`, `provide_factory` or `provide_class` returns a new injector
that binds one token and delegates every other token to its parent.

Exports:
- `Injector`: Root of a chain; `create_injector()` builds a fresh one.
- `Scope`: Enum controlling whether a provider's value is cached (singleton) or
  built on every resolution (transient).
- `tokens` / `injectable`: Declare the ordered tokens a class or function needs.
- `TARGET_TOKEN` / `INJECTOR_TOKEN`: Reserved tokens for the requesting target and
  the injector performing the injection.
- `Disposable`: Protocol of instances torn down by `Injector.dispose()`.
"""

from ._disposal import Disposable
from ._errors import DisposedInjectorError, InjectionError, InjectorError, MissingProviderError
from ._injector import ChildInjector, Injector, create_injector
from ._tokens import INJECTOR_TOKEN, TARGET_TOKEN, Scope, injectable, tokens


__all__ = [
    "INJECTOR_TOKEN",
    "TARGET_TOKEN",
    "ChildInjector",
    "Disposable",
    "DisposedInjectorError",
    "InjectionError",
    "Injector",
    "InjectorError",
    "MissingProviderError",
    "Scope",
    "create_injector",
    "injectable",
    "tokens",
]
