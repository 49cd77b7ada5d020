"""Unit tests configuration file."""

import pytest

from guardset.proto import GuardDescriptor, ProgramDescriptor, require


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


def raw_guard(name: str, width: int) -> GuardDescriptor:
    """A guard whose settings are exactly ``width`` raw bytes."""

    def encode(value: bytes) -> bytes:
        return bytes(value)

    def decode(data: bytes | memoryview, offset: int) -> tuple[bytes, int]:
        require(data, offset, width, name)
        return bytes(data[offset : offset + width]), width

    return GuardDescriptor(name=name, settings_bytes=width, encode=encode, decode=decode)


@pytest.fixture
def make_guard():
    return raw_guard


@pytest.fixture
def guard_a():
    return raw_guard("a", 2)


@pytest.fixture
def guard_b():
    return raw_guard("b", 0)


@pytest.fixture
def program_ab():
    return ProgramDescriptor(name="ab", available_guards=("a", "b"), address="AbProgram111")
