from __future__ import annotations

import importlib
from typing import Any


def _load_base_model() -> type[Any] | None:
    try:
        module = importlib.import_module("pydantic")
    except ImportError:
        return None
    base_model = getattr(module, "BaseModel", None)
    if isinstance(base_model, type):
        return base_model
    return None


BASE_MODEL: type[Any] | None = _load_base_model()


def is_pydantic_model(value: Any) -> bool:
    """Return whether ``value`` is a pydantic model instance."""
    return BASE_MODEL is not None and isinstance(value, BASE_MODEL)


def dump_pydantic_model(value: Any) -> Any:
    """Dump a pydantic model into JSON-compatible builtins."""
    return value.model_dump(mode="json")


__all__ = ["BASE_MODEL", "dump_pydantic_model", "is_pydantic_model"]
