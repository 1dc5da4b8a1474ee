from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, TypeAlias, Union

from fnwire.exceptions import FnWireInvalidArgumentError
from fnwire.integrations.pydantic import dump_pydantic_model, is_pydantic_model

Serializable: TypeAlias = Union[
    None,
    bool,
    int,
    float,
    str,
    list["Serializable"],
    tuple["Serializable", ...],
    dict[str, "Serializable"],
]
"""Argument domain accepted by injectables."""

_SCALAR_TYPES = (bool, int, float, str)


def normalize_argument(arg: Any) -> Serializable:
    """Convert an injectable argument into plain JSON-compatible builtins.

    Tuples become lists, integral floats become ints (so ``1`` and ``1.0``
    share a key) and pydantic models are dumped in JSON mode. Mapping keys
    must be strings; values are normalized recursively.

    Raises:
        FnWireInvalidArgumentError: If the argument, or any nested value, is
            outside the serializable domain or contains itself.

    """
    return _normalize(arg, set())


def _normalize(arg: Any, active_ids: set[int]) -> Serializable:
    if isinstance(arg, float) and arg.is_integer():
        return int(arg)
    if arg is None or isinstance(arg, _SCALAR_TYPES):
        return arg
    if isinstance(arg, (list, tuple, Mapping)):
        if id(arg) in active_ids:
            msg = f"Injectable arguments must not contain themselves ({type(arg).__name__!r})."
            raise FnWireInvalidArgumentError(msg)
        active_ids.add(id(arg))
        try:
            return _normalize_container(arg, active_ids)
        finally:
            active_ids.discard(id(arg))
    if is_pydantic_model(arg):
        return _normalize(dump_pydantic_model(arg), active_ids)

    msg = (
        f"Unsupported injectable argument of type {type(arg).__name__!r}. "
        "Use None, bool, int, float, str, lists/tuples or string-keyed mappings."
    )
    raise FnWireInvalidArgumentError(msg)


def _normalize_container(arg: Any, active_ids: set[int]) -> Serializable:
    if not isinstance(arg, Mapping):
        return [_normalize(item, active_ids) for item in arg]
    normalized: dict[str, Serializable] = {}
    for key, value in arg.items():
        if not isinstance(key, str):
            msg = f"Mapping keys of injectable arguments must be strings, got {key!r}."
            raise FnWireInvalidArgumentError(msg)
        normalized[key] = _normalize(value, active_ids)
    return normalized


def canonical_key(arg: Any = None) -> str:
    """Return the memoization key for an injectable argument.

    Equal arguments always produce equal keys: mapping keys are sorted, so two
    mappings built in different insertion orders share one cache entry. ``None``
    stands for "no argument".
    """
    return json.dumps(
        normalize_argument(arg),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


__all__ = ["Serializable", "canonical_key", "normalize_argument"]
