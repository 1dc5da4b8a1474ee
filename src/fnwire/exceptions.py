from __future__ import annotations


class FnWireError(Exception):
    """Represent a base class for all fnwire-specific failures.

    Catch this type when you want to handle any fnwire error path without
    matching each concrete exception class individually.
    """


class FnWireMissingBindingError(FnWireError):
    """Signal that resolution reached the root container without a binding.

    Raised by ``Container.resolve`` (and by declared callables under an ambient
    container) when neither the container nor any of its parents has a binding
    for the requested injectable and the injectable has no default handler.

    Typical fixes include passing the binding to ``run``/``with_scope`` or
    declaring the injectable with a default handler.
    """

    def __init__(self, injectable_name: str) -> None:
        self.injectable_name = injectable_name
        super().__init__(
            f"Binding for injectable {injectable_name or '<unnamed>'!r} not found "
            "in the container chain.",
        )


class FnWireNoContainerError(FnWireError):
    """Signal a declared callable invoked outside of any ambient scope.

    Raised when no container is ambient and the injectable has no default
    handler to fall back to.

    Typical fix is wrapping the call in ``run(...)``/``with scope(...)``.
    """

    def __init__(self, injectable_name: str) -> None:
        self.injectable_name = injectable_name
        super().__init__(
            f"Injectable {injectable_name or '<unnamed>'!r} can't be called without "
            "an ambient container. Enter a scope with run(...) or scope(...) first.",
        )


class FnWireInvalidArgumentError(FnWireError, TypeError):
    """Signal an argument that cannot be used as a memoization key.

    Arguments passed to injectables must be JSON-like values: ``None``, ``bool``,
    ``int``, ``float``, ``str``, lists/tuples of those, and mappings with string
    keys. Pydantic models are accepted and normalized through ``model_dump``.
    """
