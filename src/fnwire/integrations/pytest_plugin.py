from __future__ import annotations

from collections.abc import Iterator

import pytest

from fnwire.ambient import ambient_context
from fnwire.container import Container
from fnwire.injectable import AnyBinding


@pytest.fixture()
def fnwire_bindings() -> list[AnyBinding]:
    """Fixture hook for bindings installed into ``fnwire_container``.

    Override this fixture in your test suite to return the bindings (real
    implementations or test doubles) that the test should run with.

    """
    return []


@pytest.fixture()
def fnwire_container(fnwire_bindings: list[AnyBinding]) -> Iterator[Container]:
    """Provide a fresh container that is ambient for the whole test.

    The container holds ``fnwire_bindings`` and is nested under whatever
    container was ambient when the fixture was set up. The previous ambient
    container is restored at teardown.

    """
    container = Container(ambient_context.get_current())
    with container.enter(fnwire_bindings):
        yield container
