"""Shared fixtures for perch tests."""

import pytest

from perch.location.memory import MemoryLocation
from perch.testing import RecordingHost, StubElement


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def host() -> RecordingHost:
    return RecordingHost()


@pytest.fixture
def view() -> StubElement:
    return StubElement("view")


@pytest.fixture
def layout(view: StubElement) -> StubElement:
    return StubElement("layout", {"#view": view})


@pytest.fixture
def location() -> MemoryLocation:
    return MemoryLocation("http://localhost/")
