from __future__ import annotations

import logging
import threading
from collections.abc import Awaitable, Callable, Iterable, Iterator
from contextlib import AbstractContextManager, contextmanager, nullcontext
from typing import TYPE_CHECKING, Any, Literal, TypeVar, Union

from fnwire.ambient import ambient_context
from fnwire.exceptions import FnWireMissingBindingError
from fnwire.injectable import AnyBinding, Injectable, Request
from fnwire.keys import canonical_key
from fnwire.lock_mode import LockMode

T = TypeVar("T")

if TYPE_CHECKING:
    from typing_extensions import Self

    from fnwire.functional import InjectableCallable

    InjectableTarget = Union[Injectable[T, Any], InjectableCallable[T, Any]]

logger = logging.getLogger(__name__)
_MISSING = object()


class _BindingRecord:
    """Installed binding plus the values memoized for it by canonical argument key."""

    __slots__ = ("binding", "values")

    def __init__(self, binding: AnyBinding) -> None:
        self.binding = binding
        self.values: dict[str, Any] = {}


def _as_injectable(target: InjectableTarget[T]) -> Injectable[T, Any]:
    if isinstance(target, Injectable):
        return target
    return target.injectable


class Container:
    """Hold active bindings and their memoized values.

    A container resolves requests against its own bindings first and delegates
    everything it has no binding for to its parent. The root of a chain falls
    back to the injectable's default handler, installing it lazily as a regular
    binding so that its values are memoized too.

    Containers are usually created implicitly by ``run``/``scope``, each nested
    under the container that is ambient at call time. Construct one directly
    for explicit, non-ambient management and call ``resolve``/``get`` on it, or
    make it ambient with ``run``/``arun``/``enter``.
    """

    def __init__(
        self,
        parent: Container | None = None,
        *,
        lock_mode: LockMode | Literal["from_parent"] = "from_parent",
    ) -> None:
        """Initialize an empty container.

        With ``LockMode.THREAD`` every container of a chain shares the reentrant
        lock of its nearest locked ancestor, so resolution across the whole
        chain is serialized and lock ordering between containers cannot arise.

        Args:
            parent: Container to delegate unbound requests to. Never mutated.
            lock_mode: Cache locking strategy. ``"from_parent"`` inherits the
                parent's mode, or ``LockMode.THREAD`` for a root container.

        """
        if lock_mode == "from_parent":
            lock_mode = parent.lock_mode if parent is not None else LockMode.THREAD
        self._parent = parent
        self._lock_mode: LockMode = lock_mode
        self._lock: threading.RLock | None = None
        if lock_mode is LockMode.THREAD:
            self._lock = self._find_ancestor_lock() or threading.RLock()
        self._records: dict[int, _BindingRecord] = {}

    @property
    def parent(self) -> Container | None:
        return self._parent

    @property
    def lock_mode(self) -> LockMode:
        return self._lock_mode

    def install(self, bindings: Iterable[AnyBinding]) -> None:
        """Install bindings into this container, replacing previous ones.

        Each installed binding starts with an empty cache, even when the same
        binding was installed before. Parent containers are never touched.
        """
        with self._locked():
            for binding in bindings:
                self._install_binding(binding)

    def use(self, bindings: Iterable[AnyBinding]) -> None:
        """Alias of ``install``."""
        self.install(bindings)

    def is_bound(self, injectable: InjectableTarget[Any]) -> bool:
        """Return whether this container or one of its parents binds ``injectable``."""
        injectable_id = _as_injectable(injectable).injectable_id
        container: Container | None = self
        while container is not None:
            if injectable_id in container._records:
                return True
            container = container._parent
        return False

    def resolve(self, request: Request[T, Any]) -> T:
        """Resolve a request, memoizing the value per canonical argument key.

        Raises:
            FnWireMissingBindingError: If no container in the chain binds the
                injectable and it has no default handler.
            FnWireInvalidArgumentError: If the request argument is not
                serializable.

        """
        key = canonical_key(request.arg)
        with self._locked():
            return self._resolve_locked(request, key)

    def get(self, injectable: InjectableTarget[T], arg: Any = None) -> T:
        """Build a request for ``injectable`` (or a declared callable) and resolve it."""
        return self.resolve(_as_injectable(injectable)(arg))

    def run(self, body: Callable[[], T], bindings: Iterable[AnyBinding] | None = None) -> T:
        """Install ``bindings`` and call ``body`` with this container ambient.

        The previously ambient container is restored when ``body`` returns or
        raises.
        """
        with self.enter(bindings):
            return body()

    async def arun(
        self,
        body: Callable[[], Awaitable[T]],
        bindings: Iterable[AnyBinding] | None = None,
    ) -> T:
        """Install ``bindings`` and await ``body()`` with this container ambient."""
        with self.enter(bindings):
            return await body()

    @contextmanager
    def enter(self, bindings: Iterable[AnyBinding] | None = None) -> Iterator[Self]:
        """Make this container ambient for the duration of a ``with`` block."""
        if bindings is not None:
            self.install(bindings)
        with ambient_context.bind(self):
            yield self

    def _find_ancestor_lock(self) -> threading.RLock | None:
        container = self._parent
        while container is not None:
            if container._lock is not None:
                return container._lock
            container = container._parent
        return None

    def _locked(self) -> AbstractContextManager[Any]:
        if self._lock is None:
            return nullcontext()
        return self._lock

    def _resolve_locked(self, request: Request[T, Any], key: str) -> T:
        injectable = request.injectable
        record = self._records.get(injectable.injectable_id)
        if record is None:
            if self._parent is not None:
                with self._parent._locked():
                    return self._parent._resolve_locked(request, key)

            default_handler = injectable.default_handler
            if default_handler is None:
                raise FnWireMissingBindingError(injectable.name)

            logger.debug("Installing default handler binding for %r", injectable)
            record = self._install_binding(injectable.impl(default_handler))

        value = record.values.get(key, _MISSING)
        if value is not _MISSING:
            return value  # type: ignore[no-any-return]

        logger.debug("Cache miss for %r with key %s", injectable, key)
        value = record.binding.handler(request.arg)
        record.values[key] = value
        return value  # type: ignore[no-any-return]

    def _install_binding(self, binding: AnyBinding) -> _BindingRecord:
        record = _BindingRecord(binding)
        self._records[binding.injectable.injectable_id] = record
        logger.debug("Installed binding for %r into container %#x", binding.injectable, id(self))
        return record

    def __repr__(self) -> str:
        return (
            f"Container(bindings={len(self._records)}, lock_mode={self._lock_mode.value}, "
            f"has_parent={self._parent is not None})"
        )


__all__ = ["Container"]
