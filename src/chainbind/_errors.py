from __future__ import annotations


class InjectorError(RuntimeError):
    """Base class of every failure raised by an injector."""


class MissingProviderError(InjectorError):
    def __init__(self, token: str) -> None:
        super().__init__(f'No provider found for "{token}"!')
        self.token = token


class InjectionError(InjectorError):
    """Raised when a declared token of a class or function cannot be resolved."""

    def __init__(self, target_name: str, inner: BaseException) -> None:
        super().__init__(f'Could not inject "{target_name}". Inner error: {inner}')
        self.target_name = target_name
        self.inner = inner


class DisposedInjectorError(InjectorError):
    def __init__(self, operation: str, name: str) -> None:
        super().__init__(
            f"Injector is already disposed. Please don't use it anymore. Tried to {operation} \"{name}\"."
        )
        self.operation = operation
        self.name = name
