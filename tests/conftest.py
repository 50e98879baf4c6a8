import pytest

from termly.config import LiveOptions
from termly.registry import LiveRegistry, reset_default_registry, set_default_registry

from .virtual_terminal import VirtualTerminal


@pytest.fixture
def vt():
    """A 24x200 interactive virtual terminal with the cursor at the origin."""
    return VirtualTerminal(rows=24, columns=200)


@pytest.fixture
def registry(vt):
    """A registry over ``vt`` with the default options."""
    return LiveRegistry(vt, LiveOptions())


@pytest.fixture(autouse=True)
def _isolated_default_registry():
    """Never let a test touch the real stderr registry."""
    set_default_registry(LiveRegistry(VirtualTerminal(interactive=False)))
    yield
    reset_default_registry()
