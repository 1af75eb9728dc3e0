from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, TypeVar, cast

from ._disposal import DisposalTracker
from ._errors import DisposedInjectorError, InjectionError, MissingProviderError
from ._providers import ClassProvider, FactoryProvider, ValueProvider
from ._tokens import INJECTOR_TOKEN, TARGET_TOKEN, Scope, declared_tokens, target_name


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from ._providers import Provider

    T = TypeVar("T")

    Token = str
    Target = Callable[..., Any]

_NOT_CACHED = object()


class Injector:
    """Root of a provider chain.

    - binds no token and owns no instances
    - `provide_*` returns a new `ChildInjector` extending the chain
    - `inject_class` / `inject_function` build untracked objects
    - `dispose` cascades from the node it is called on toward this root.
    """

    def __init__(self) -> None:
        self._parent: Injector | None = None
        self._lock = threading.RLock()

    def __enter__(self) -> Injector:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()

    @property
    def disposed(self) -> bool:
        # The root stays usable so chains sharing it are unaffected.
        return False

    def provide_value(self, token: Token, value: object) -> ChildInjector:
        return self._extend(token, ValueProvider(value))

    def provide_factory(
        self,
        token: Token,
        factory: Callable[..., Any],
        scope: Scope = Scope.SINGLETON,
    ) -> ChildInjector:
        """Bind `token` to the result of calling `factory` with its declared tokens.

        Example:
          @injectable("config")
          def create_db(config): ...

          injector = root.provide_factory("db", create_db, Scope.TRANSIENT)

        """
        return self._extend(token, FactoryProvider(factory, scope))

    def provide_class(
        self,
        token: Token,
        cls: type,
        scope: Scope = Scope.SINGLETON,
    ) -> ChildInjector:
        return self._extend(token, ClassProvider(cls, scope))

    def _extend(self, token: Token, provider: Provider) -> ChildInjector:
        with self._lock:
            self._throw_if_disposed("provide", token)
            child = ChildInjector(self, token, provider, _from_parent=True)
            logger.debug("Extended injector chain with %r", child)
            return child

    def resolve(self, token: Token) -> Any:
        """Resolve `token` against this node and its ancestors."""
        with self._lock:
            self._throw_if_disposed("resolve", token)
            return self._resolve(token, None)

    def inject_class(self, cls: type[T]) -> T:
        """Construct `cls` with its declared tokens. The instance is not tracked for disposal."""
        with self._lock:
            self._throw_if_disposed("inject", target_name(cls))
            return Invoker(self).invoke(cls, requester=None)

    def inject_function(self, fn: Callable[..., T]) -> T:
        """Call `fn` with its declared tokens. The result is not tracked for disposal."""
        with self._lock:
            self._throw_if_disposed("inject", target_name(fn))
            return Invoker(self).invoke(fn, requester=None)

    def dispose(self) -> None:
        logger.debug("Root injector has nothing to dispose")

    def _resolve(self, token: Token, requester: Target | None) -> Any:
        node: Injector | None = self
        # The root binds nothing and ends the walk.
        while isinstance(node, ChildInjector):
            if node.token == token:
                return node._provide(requester)  # noqa: SLF001
            node = node._parent  # noqa: SLF001

        raise MissingProviderError(token)

    def _throw_if_disposed(self, operation: str, name: str) -> None:
        if self.disposed:
            raise DisposedInjectorError(operation, name)


class ChildInjector(Injector):
    """One link of a provider chain: a single token binding plus delegation to its parent.

    Nodes are never mutated by their descendants; extending a chain always
    creates a new node.
    """

    def __init__(
        self,
        parent: Injector,
        token: Token,
        provider: Provider,
        *,
        _from_parent: bool = False,
    ) -> None:
        if not _from_parent:
            msg = "ChildInjector instances must be created via provide_value/provide_factory/provide_class"
            raise RuntimeError(msg)
        # Whole chain shares the root's lock.
        self._parent = parent
        self._lock = parent._lock
        self._token = token
        self._provider = provider
        self._cached: object = _NOT_CACHED
        self._tracker = DisposalTracker()
        self._disposed = False

    def __repr__(self) -> str:
        scope = getattr(self._provider, "scope", None)
        kind = type(self._provider).__name__
        return f"<ChildInjector {self._token!r} {kind}{f' {scope.value}' if scope else ''}>"

    @property
    def token(self) -> Token:
        return self._token

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Dispose the ancestors first, then the instances this node created.

        Calling it again is a no-op. A failing ancestor teardown still lets
        this node's instances be disposed before the error propagates.
        """
        with self._lock:
            if self._disposed:
                return
            self._disposed = True

            try:
                cast("Injector", self._parent).dispose()
            finally:
                logger.debug("Disposing %d instance(s) created by %r", len(self._tracker), self)
                self._tracker.dispose_all()

    def _provide(self, requester: Target | None) -> Any:
        # Reached through a descendant after this node was disposed.
        self._throw_if_disposed("resolve", self._token)

        provider = self._provider
        if isinstance(provider, ValueProvider):
            return provider.value

        if provider.scope is Scope.SINGLETON and self._cached is not _NOT_CACHED:
            return self._cached

        # Provider sees this node's ancestors, never its descendants.
        instance = Invoker(self).invoke(provider.target, requester=requester)
        logger.debug("Created %s for %r", type(instance).__name__, self)
        self._tracker.track(instance)

        if provider.scope is Scope.SINGLETON:
            self._cached = instance

        return instance


class Invoker:
    """Calls a target with the values of its declared tokens, resolved against one injector."""

    def __init__(self, injector: Injector) -> None:
        self._injector = injector

    def invoke(self, target: Callable[..., T], requester: Target | None) -> T:
        args = self._resolve_arguments(target, requester)
        return target(*args)

    def _resolve_arguments(self, target: Target, requester: Target | None) -> list[Any]:
        args = []
        for token in declared_tokens(target):
            try:
                args.append(self._resolve_argument(token, target, requester))
            except Exception as e:
                raise InjectionError(target_name(target), e) from e
        return args

    def _resolve_argument(self, token: Token, target: Target, requester: Target | None) -> Any:
        if token == TARGET_TOKEN:
            return requester
        if token == INJECTOR_TOKEN:
            return self._injector
        return self._injector._resolve(token, target)  # noqa: SLF001


def create_injector() -> Injector:
    """Create a new, empty root injector."""
    return Injector()
