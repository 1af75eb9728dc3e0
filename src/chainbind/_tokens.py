from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar


if TYPE_CHECKING:
    from collections.abc import Callable

    F = TypeVar("F", bound=Callable[..., Any])

    Token = str


# Reserved tokens, only understood by the injection step.
TARGET_TOKEN = "$target"
INJECTOR_TOKEN = "$injector"

INJECT_ATTRIBUTE = "inject"


class Scope(Enum):
    SINGLETON = "singleton"
    TRANSIENT = "transient"


def tokens(*names: Token) -> tuple[Token, ...]:
    """Build an ordered token declaration.

    Example:
      class Repo:
          inject = tokens("db", INJECTOR_TOKEN)

    """
    return names


def injectable(*names: Token) -> Callable[[F], F]:
    """Decorator variant of `tokens`: attaches the declaration to a class or function."""

    def decorate(target: F) -> F:
        setattr(target, INJECT_ATTRIBUTE, tokens(*names))
        return target

    return decorate


def declared_tokens(target: Callable[..., Any]) -> tuple[Token, ...]:
    """Return the tokens `target` declares, in order. No declaration means no tokens."""
    declared = getattr(target, INJECT_ATTRIBUTE, None)
    if declared is None:
        return ()
    if isinstance(declared, str):
        msg = f"{target_name(target)}.{INJECT_ATTRIBUTE} must be a sequence of tokens, not a single string"
        raise TypeError(msg)
    return tuple(declared)


def target_name(target: object) -> str:
    return getattr(target, "__name__", None) or repr(target)
