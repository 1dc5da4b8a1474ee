from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for memoized binding values.

    Use these values for container-level ``lock_mode``. Child containers
    accept ``"from_parent"`` at configuration time and inherit the mode of the
    container they are nested under.
    """

    THREAD = "thread"
    """Serialize resolution across a container chain with one ``threading.RLock``."""

    NONE = "none"
    """Disable locking around cache reads/writes."""
