from __future__ import annotations

import itertools
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")
ArgT = TypeVar("ArgT")

InjectableHandler = Callable[[ArgT], T]
"""Implementation signature: one serializable argument in, one value out."""

_injectable_ids = itertools.count(1)


@dataclass(frozen=True, eq=False, slots=True)
class Injectable(Generic[T, ArgT]):
    """Identity token for a named service slot.

    Containers key their bindings by ``injectable_id``, issued once per
    declaration, so two injectables with the same ``name`` never collide.
    Calling an injectable builds a ``Request`` for the given argument.
    """

    name: str = ""
    default_handler: InjectableHandler[ArgT, T] | None = None
    injectable_id: int = field(default_factory=lambda: next(_injectable_ids), init=False)

    def __call__(self, arg: ArgT | None = None) -> Request[T, ArgT]:
        return Request(injectable=self, arg=arg)

    def impl(self, handler: InjectableHandler[ArgT, T]) -> Binding[T, ArgT]:
        """Attach an implementation, returning a new independent ``Binding``."""
        return Binding(injectable=self, handler=handler)

    def __repr__(self) -> str:
        return f"Injectable({self.name!r}, id={self.injectable_id})"


@dataclass(frozen=True, slots=True)
class Request(Generic[T, ArgT]):
    """Intent to resolve ``injectable`` for one argument."""

    injectable: Injectable[T, ArgT]
    arg: ArgT | None = None


@dataclass(frozen=True, slots=True)
class Binding(Generic[T, ArgT]):
    """Implementation attached to exactly one injectable.

    Bindings are inert until installed into a container. Calling one invokes
    its handler directly, bypassing any container.
    """

    injectable: Injectable[T, ArgT]
    handler: InjectableHandler[ArgT, T]

    def __call__(self, arg: ArgT | None = None) -> T:
        return self.handler(arg)  # type: ignore[arg-type]


AnyInjectable = Injectable[Any, Any]
AnyBinding = Binding[Any, Any]

__all__ = [
    "AnyBinding",
    "AnyInjectable",
    "Binding",
    "Injectable",
    "InjectableHandler",
    "Request",
]
