"""Shared pytest fixtures for fnwire tests."""

from collections.abc import Iterator

import pytest

from fnwire.ambient import ambient_context
from fnwire.container import Container
from fnwire.lock_mode import LockMode


@pytest.fixture()
def container() -> Container:
    """Root container with the default thread lock mode."""
    return Container()


@pytest.fixture()
def container_no_lock() -> Container:
    """Root container with cache locking disabled."""
    return Container(lock_mode=LockMode.NONE)


@pytest.fixture(autouse=True)
def _no_ambient_container_leak() -> Iterator[None]:
    """Fail a test that leaves a container ambient behind."""
    before = ambient_context.get_current()
    yield
    assert ambient_context.get_current() is before
