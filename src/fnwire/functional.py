from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Iterator
from contextlib import contextmanager
from typing import Generic, TypeVar

from fnwire.ambient import ambient_context
from fnwire.container import Container
from fnwire.exceptions import FnWireNoContainerError
from fnwire.injectable import AnyBinding, Binding, Injectable, InjectableHandler

T = TypeVar("T")
ArgT = TypeVar("ArgT")


class InjectableCallable(Generic[T, ArgT]):
    """Declared service slot that resolves itself through the ambient container.

    Calling the object resolves the service for one argument:

    - with an ambient container, the call becomes a ``Request`` resolved (and
      memoized) by that container;
    - without one, the default handler is invoked directly, unmemoized;
    - without both, ``FnWireNoContainerError`` is raised.

    Implementations are attached with ``impl`` (or its alias
    ``attach_implementation``), which also works as a decorator.
    """

    __slots__ = ("_injectable",)

    def __init__(self, injectable: Injectable[T, ArgT]) -> None:
        self._injectable = injectable

    @property
    def injectable(self) -> Injectable[T, ArgT]:
        return self._injectable

    @property
    def name(self) -> str:
        return self._injectable.name

    def __call__(self, arg: ArgT | None = None) -> T:
        return self.invoke(arg)

    def invoke(self, arg: ArgT | None = None) -> T:
        """Resolve the service for ``arg``.

        Raises:
            FnWireNoContainerError: If no container is ambient and the
                injectable has no default handler.
            FnWireMissingBindingError: If the ambient container chain has no
                binding and the injectable has no default handler.

        """
        container = ambient_context.get_current()
        if container is None:
            default_handler = self._injectable.default_handler
            if default_handler is None:
                raise FnWireNoContainerError(self._injectable.name)
            return default_handler(arg)  # type: ignore[arg-type]

        return container.resolve(self._injectable(arg))

    def impl(self, handler: InjectableHandler[ArgT, T]) -> Binding[T, ArgT]:
        """Create a new binding implementing this service with ``handler``."""
        return self._injectable.impl(handler)

    def attach_implementation(self, handler: InjectableHandler[ArgT, T]) -> Binding[T, ArgT]:
        """Alias of ``impl``."""
        return self.impl(handler)

    def __repr__(self) -> str:
        return f"InjectableCallable({self._injectable.name!r})"


def declare(
    name: str | None = None,
    default_handler: InjectableHandler[ArgT, T] | None = None,
) -> InjectableCallable[T, ArgT]:
    """Declare a service slot.

    Args:
        name: Human-readable name used in error messages.
        default_handler: Fallback implementation used when no binding is found
            in the container chain, or when no container is ambient at all.

    Returns:
        Callable facade over a freshly issued ``Injectable``.

    """
    return InjectableCallable(Injectable(name=name or "", default_handler=default_handler))


def with_scope(body: Callable[[], T], bindings: Iterable[AnyBinding] | None = None) -> T:
    """Call ``body`` inside a new scope holding ``bindings``.

    The new container is nested under the currently ambient one, so requests
    it cannot satisfy bubble outward through the enclosing scopes.
    """
    return Container(ambient_context.get_current()).run(body, bindings)


run = with_scope


async def arun(
    body: Callable[[], Awaitable[T]],
    bindings: Iterable[AnyBinding] | None = None,
) -> T:
    """Await ``body()`` inside a new scope holding ``bindings``."""
    return await Container(ambient_context.get_current()).arun(body, bindings)


@contextmanager
def scope(bindings: Iterable[AnyBinding] | None = None) -> Iterator[Container]:
    """Open a new nested scope for the duration of a ``with`` block.

    Example:
        >>> with scope([service_impl]) as container:
        ...     service(1)

    """
    with Container(ambient_context.get_current()).enter(bindings) as container:
        yield container


__all__ = [
    "InjectableCallable",
    "arun",
    "declare",
    "run",
    "scope",
    "with_scope",
]

