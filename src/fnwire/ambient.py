from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fnwire.container import Container


class AmbientContext:
    """Context-local pointer to the currently active container.

    Backed by ``contextvars``, so every thread and every asyncio task observes
    its own ambient container. Pushes and pops are strictly last-in-first-out.
    """

    __slots__ = ("_current_container_var", "_token_stack_var")

    def __init__(self) -> None:
        self._current_container_var: ContextVar[Container | None] = ContextVar(
            "fnwire_ambient_container",
            default=None,
        )
        self._token_stack_var: ContextVar[tuple[Token[Container | None], ...]] = ContextVar(
            "fnwire_ambient_tokens",
            default=(),
        )

    def get_current(self) -> Container | None:
        """Return the ambient container, or ``None`` outside of any scope."""
        return self._current_container_var.get()

    def push(self, container: Container) -> None:
        token = self._current_container_var.set(container)
        tokens = self._token_stack_var.get()
        self._token_stack_var.set((*tokens, token))

    def pop(self) -> None:
        tokens = self._token_stack_var.get()
        if not tokens:
            return
        token = tokens[-1]
        self._token_stack_var.set(tokens[:-1])
        self._current_container_var.reset(token)

    @contextmanager
    def bind(self, container: Container) -> Iterator[Container]:
        """Make ``container`` ambient, restoring the previous one on exit."""
        self.push(container)
        try:
            yield container
        finally:
            self.pop()


ambient_context = AmbientContext()
"""Process-wide ambient context used by declared callables."""


def get_current() -> Container | None:
    """Return the container that is ambient in the current context."""
    return ambient_context.get_current()


__all__ = ["AmbientContext", "ambient_context", "get_current"]
