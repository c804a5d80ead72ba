"""Shared fixtures for harness tests.

For the test doubles themselves, use:
  from helpers import FakeClock, ScriptedLauncher
"""

import pytest
from helpers import FakeClock, ScriptedLauncher

from foldbench.scenarios.definitions import ConfigurationSpec


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def launcher(fake_clock):
    return ScriptedLauncher(fake_clock)


@pytest.fixture
def two_configs():
    return [
        ConfigurationSpec.from_flags("default"),
        ConfigurationSpec.from_flags("window_20", "-w 20"),
    ]
