from fnwire.ambient import AmbientContext, ambient_context, get_current
from fnwire.container import Container
from fnwire.exceptions import (
    FnWireError,
    FnWireInvalidArgumentError,
    FnWireMissingBindingError,
    FnWireNoContainerError,
)
from fnwire.functional import InjectableCallable, arun, declare, run, scope, with_scope
from fnwire.injectable import Binding, Injectable, Request
from fnwire.keys import Serializable, canonical_key
from fnwire.lock_mode import LockMode

__all__ = [
    "AmbientContext",
    "Binding",
    "Container",
    "FnWireError",
    "FnWireInvalidArgumentError",
    "FnWireMissingBindingError",
    "FnWireNoContainerError",
    "Injectable",
    "InjectableCallable",
    "LockMode",
    "Request",
    "Serializable",
    "ambient_context",
    "arun",
    "canonical_key",
    "declare",
    "get_current",
    "run",
    "scope",
    "with_scope",
]
